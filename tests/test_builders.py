from vessel.builders import make_container


def test_make_container_applies_every_section():
    container = make_container(
        services={"greeting": "Hello"},
        factories={"greeter": lambda c: lambda name: f"{c['greeting']} {name}"},
        aliases={"salutation": "greeter"},
        shared={"greeter": False},
    )

    assert container["salutation"]("Dominic") == "Hello Dominic"
    assert container.get("greeter") is not container.get("greeter")
    assert container.shared_by_default


def test_make_container_without_arguments_is_empty():
    container = make_container(shared_by_default=False)

    assert container.keys() == set()
    assert not container.shared_by_default
