import pytest

from vessel.aliases import AliasGraph
from vessel.errors import CyclicAliasError, DuplicateInstanceError
from vessel.stores import EntryStores


@pytest.fixture
def stores() -> EntryStores:
    return EntryStores()


@pytest.fixture
def graph(stores) -> AliasGraph:
    return AliasGraph(stores)


def test_unaliased_key_resolves_to_itself(graph):
    assert graph.resolve("a") == "a"
    assert graph.terminal_key("a") == "a"


def test_chain_resolves_to_terminal_key(graph):
    graph.apply_batch({"a": "b", "b": "c", "c": "d"}, initial=True)

    assert graph.resolved == {"a": "d", "b": "d", "c": "d"}
    assert graph.terminal_key("a") == "d"
    assert graph.edges["a"] == "b"


def test_target_need_not_exist(graph, stores):
    graph.apply_batch({"a": "nowhere"}, initial=True)

    assert graph.terminal_key("a") == "nowhere"
    assert not stores.is_registered("nowhere")


def test_cycle_is_rejected_naming_repeated_key(graph):
    graph.declare("a", "b")
    graph.declare("b", "a")

    with pytest.raises(CyclicAliasError, match="Cyclic alias 'a'.") as error:
        graph.resolve("a")

    assert error.value.key == "a"


def test_self_alias_is_a_cycle(graph):
    with pytest.raises(CyclicAliasError):
        graph.apply_batch({"a": "a"}, initial=True)


def test_alias_cannot_be_declared_over_instance(graph, stores):
    stores.set_service("a", object())

    with pytest.raises(DuplicateInstanceError):
        graph.declare("a", "b")

    assert "a" not in graph


def test_new_alias_chains_through_existing_alias(graph):
    graph.apply_batch({"a": "b"}, initial=True)
    graph.apply_batch({"c": "a"})

    assert graph.terminal_key("c") == "b"
    assert graph.terminal_key("a") == "b"


def test_existing_alias_is_redirected_when_its_terminal_becomes_an_alias(graph):
    graph.apply_batch({"a": "b"}, initial=True)
    graph.apply_batch({"b": "c"})

    assert graph.resolved == {"a": "c", "b": "c"}


def test_batch_chaining_into_itself_re_resolves_everything(graph):
    graph.apply_batch({"x": "a"}, initial=True)
    graph.apply_batch({"a": "b", "b": "c"})

    assert graph.resolved == {"x": "c", "a": "c", "b": "c"}


def test_re_pointing_an_alias_updates_chains_through_it(graph):
    graph.apply_batch({"x": "a", "a": "b"}, initial=True)
    graph.apply_batch({"a": "c"})

    assert graph.resolved == {"x": "c", "a": "c"}


def test_cycle_introduced_later_is_reported_on_every_lookup(graph):
    graph.apply_batch({"a": "b", "x": "y"}, initial=True)

    with pytest.raises(CyclicAliasError):
        graph.apply_batch({"b": "a"})

    with pytest.raises(CyclicAliasError):
        graph.terminal_key("a")
    with pytest.raises(CyclicAliasError):
        graph.terminal_key("b")
    assert graph.terminal_key("x") == "y"


def test_alias_into_a_cycle_is_rejected(graph):
    graph.declare("a", "b")
    graph.declare("b", "a")

    with pytest.raises(CyclicAliasError):
        graph.apply_batch({"c": "a"})

    with pytest.raises(CyclicAliasError):
        graph.terminal_key("c")
