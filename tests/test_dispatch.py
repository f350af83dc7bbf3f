import pytest

from api_collections.association import Association
from api_collections.collection import Collection
from api_collections.dispatch import DynamicDispatcher, ResolutionKind, UndefinedOperationError

from sample_resources import Ticket, User


class TestResolution:
    """Order of the fallback chain"""

    def test_declared_type_operation_comes_first(self):
        assert DynamicDispatcher(Ticket).resolve("show_many").kind is ResolutionKind.TYPE_OPERATION

    def test_undeclared_class_method_is_not_a_type_operation(self):
        assert DynamicDispatcher(Ticket).resolve("not_exposed").kind is ResolutionKind.SUB_COLLECTION

    def test_sequence_operation(self):
        assert DynamicDispatcher(User).resolve("size").kind is ResolutionKind.SEQUENCE_OPERATION

    def test_anything_else_is_a_sub_collection(self):
        assert DynamicDispatcher(User).resolve("incremental").kind is ResolutionKind.SUB_COLLECTION

    @pytest.mark.parametrize("name", ["_private", "__deepcopy__", "bad name", ""])
    def test_unresolvable_names(self, name):
        with pytest.raises(UndefinedOperationError):
            DynamicDispatcher(User).resolve(name)


class TestTypeOperations:
    """Class-level helpers reached through a collection"""

    def test_forwards_client_and_arguments(self, api, client):
        api.add("tickets/show_many", json={"tickets": [{"id": 1}, {"id": 2}]})
        tickets = Collection(client, Ticket)

        many = tickets.show_many([1, 2])

        assert isinstance(many, Collection)
        assert many.client is client
        assert [ticket.id for ticket in many] == [1, 2]
        assert api.last.url.params["ids"] == "1,2"


class TestSequenceOperations:
    """List helpers force a fetch of the current page"""

    @pytest.fixture
    def tickets(self, api, client):
        api.add("tickets", json={"tickets": [{"id": 1}, {"id": 2}, {"id": 3}]})
        return Collection(client, Ticket)

    def test_size(self, api, tickets):
        assert api.requests == []
        assert tickets.size() == 3
        assert len(api.requests) == 1

    def test_map_and_filter(self, tickets):
        assert tickets.map(lambda ticket: ticket.id) == [1, 2, 3]
        assert [ticket.id for ticket in tickets.filter(lambda ticket: ticket.id > 1)] == [2, 3]
        assert [ticket.id for ticket in tickets.reject(lambda ticket: ticket.id > 1)] == [1]

    def test_first_last_empty(self, tickets):
        assert tickets.first().id == 1
        assert tickets.last().id == 3
        assert tickets.empty() is False

    def test_empty_page(self, api, client):
        api.add("users", json={"users": []})
        users = Collection(client, User)
        assert users.empty() is True
        assert users.first() is None

    def test_operations_share_the_cache(self, api, tickets):
        tickets.size()
        tickets.map(lambda ticket: ticket.id)
        tickets.index(tickets[0])
        assert len(api.requests) == 1

    def test_sort_and_reverse_leave_the_page_order(self, tickets):
        assert [ticket.id for ticket in tickets.sort(key=lambda ticket: -ticket.id)] == [3, 2, 1]
        assert [ticket.id for ticket in tickets.reverse()] == [3, 2, 1]
        assert [ticket.id for ticket in tickets] == [1, 2, 3]

    def test_inserting_helpers_are_collection_methods(self, tickets):
        assert tickets.insert.__self__ is tickets
        assert tickets.extend.__self__ is tickets


class TestSubCollections:
    """Unknown names become nested collection paths"""

    def test_appends_path_segment(self, api, client):
        tickets = Collection(client, Ticket)
        incremental = tickets.incremental

        assert isinstance(incremental, Collection)
        assert incremental is not tickets
        assert incremental.resource_class is Ticket
        assert incremental.path == "tickets/incremental"
        assert api.requests == []

    def test_carries_options_over(self, api, client):
        api.add("tickets/incremental", json={"tickets": [{"id": 8}]})
        tickets = Collection(client, Ticket, per_page=10, sort_by="id")

        incremental = tickets.incremental(start_time=1500)
        incremental.fetch()

        params = api.last.url.params
        assert api.last.url.path == "/api/v2/tickets/incremental"
        assert params["per_page"] == "10"
        assert params["sort_by"] == "id"
        assert params["start_time"] == "1500"

    def test_nested_segments_accumulate(self, client):
        parent = User(client, {"id": 7})
        tickets = Collection(client, Ticket, association=Association(Ticket, parent=parent))
        assert tickets.recent.path == "users/7/tickets/recent"
        assert tickets.recent.solved.path == "users/7/tickets/recent/solved"

    def test_hasattr_on_private_names(self, client):
        tickets = Collection(client, Ticket)
        assert not hasattr(tickets, "_missing")
        with pytest.raises(AttributeError):
            tickets.__missing_dunder__

    def test_keeps_an_unsaved_parent(self, api, client):
        parent = User(client, {"name": "draft"})
        tickets = Collection(client, Ticket, association=Association(Ticket, parent=parent))

        recent = tickets.recent
        assert recent.association.parent is parent
        assert recent.to_list() == []
        assert api.requests == []
