import pytest

from vessel.errors import DuplicateInstanceError
from vessel.providers import FactoryProvider
from vessel.stores import EntryStores


@pytest.fixture
def stores() -> EntryStores:
    return EntryStores()


def test_service_can_be_stored_and_found(stores):
    stores.set_service("x", 42)

    assert stores.services["x"] == 42
    assert stores.is_registered("x")


def test_service_cannot_be_stored_twice(stores):
    stores.set_service("x", 1)

    with pytest.raises(DuplicateInstanceError, match="An instance of 'x' entry already exists."):
        stores.set_service("x", 2)

    assert stores.services["x"] == 1


def test_provider_cannot_replace_instance(stores):
    stores.set_service("x", 1)

    with pytest.raises(DuplicateInstanceError) as error:
        stores.set_provider("x", FactoryProvider(lambda c: 2))

    assert error.value.key == "x"
    assert "x" not in stores.providers


def test_provider_can_be_replaced_until_cached(stores):
    stores.set_provider("x", FactoryProvider(lambda c: 1))
    stores.set_provider("x", FactoryProvider(lambda c: 2))

    assert stores.providers["x"].get(None) == 2

    stores.cache("x", 2)
    with pytest.raises(DuplicateInstanceError):
        stores.set_provider("x", FactoryProvider(lambda c: 3))


def test_shared_flag_overrides_default(stores):
    assert stores.is_shared("x", True)
    assert not stores.is_shared("x", False)

    stores.set_shared_flag("x", False)
    assert not stores.is_shared("x", True)

    stores.set_shared_flag("x", True)
    assert stores.is_shared("x", False)


def test_unknown_key_is_not_registered(stores):
    assert not stores.is_registered("missing")
