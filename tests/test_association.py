from api_collections.association import Association, resolve_path

from sample_resources import Ticket, User


class TestResolvePath:
    """Canonical request paths"""

    def test_defaults_to_resource_name(self):
        assert resolve_path("tickets") == "tickets"

    def test_explicit_path_wins(self):
        assert resolve_path("tickets", path="views/1/tickets", collection_path=["x"]) == "views/1/tickets"

    def test_joins_collection_path_segments(self):
        assert resolve_path("tickets", collection_path=["tickets", "incremental"]) == "tickets/incremental"

    def test_prefixes_parent_path(self):
        assert resolve_path("tickets", parent_path="users/123") == "users/123/tickets"


class TestAssociation:
    """Paths scoped to a parent resource"""

    def test_nested_under_saved_parent(self, client):
        user = User(client, {"id": 123})
        association = Association(Ticket, parent=user)
        assert association.generate_path() == "users/123/tickets"
        assert association.generate_path(with_parent=False) == "tickets"
        assert association.has_unsaved_parent is False

    def test_instance_path(self, client):
        assert Association(Ticket).generate_path(with_id=9) == "tickets/9"

    def test_unsaved_parent_is_detected(self, client):
        association = Association(Ticket, parent=User(client, {"name": "new"}))
        assert association.has_unsaved_parent is True

    def test_without_parent(self):
        assert Association(Ticket).has_unsaved_parent is False

    def test_collection_path_under_parent(self, client):
        association = Association(
            Ticket, collection_path=["tickets", "recent"], parent=User(client, {"id": 7})
        )
        assert association.generate_path() == "users/7/tickets/recent"
        assert association.generate_path(with_parent=False) == "tickets/recent"
