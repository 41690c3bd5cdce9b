import pytest

from tessera import BootableServiceProvider, NotFoundError, ProviderRegistry, ServiceProvider


class Counting(ServiceProvider):
    provided = ("a", "b")

    def __init__(self):
        self.calls = 0

    def register(self):
        self.calls += 1


class Booting(BootableServiceProvider):
    provided = ("booted",)

    def __init__(self):
        self.booted = False

    def boot(self):
        self.booted = True
        self.get_container().inflector(str, lambda s: s.upper())

    def register(self):
        self.get_container().add("booted", "value")


def test_provides_has_no_side_effects():
    reg = ProviderRegistry()
    p = Counting()
    reg.add(p)
    assert reg.provides("a")
    assert not reg.provides("z")
    assert p.calls == 0


def test_register_runs_once_across_ids():
    reg = ProviderRegistry()
    p = Counting()
    reg.add(p)
    reg.register("a")
    reg.register("b")
    reg.register("a")
    assert p.calls == 1
    assert p.registered


def test_first_claiming_provider_registers():
    reg = ProviderRegistry()
    first = Counting().set_identifier("first")
    second = Counting().set_identifier("second")
    reg.add(first).add(second)
    reg.register("a")
    assert (first.calls, second.calls) == (1, 0)


def test_register_unknown_raises():
    with pytest.raises(NotFoundError):
        ProviderRegistry().register("a")


def test_same_identifier_is_added_once():
    reg = ProviderRegistry()
    reg.add(Counting())
    reg.add(Counting())
    assert len(reg) == 1
    assert Counting() in reg
    assert f"{Counting.__module__}.Counting" in reg


def test_bootable_provider_boots_on_add(container):
    p = Booting()
    container.add_service_provider(p)
    assert p.booted
    assert not p.registered
    assert container.get("booted") == "VALUE"


def test_base_provider_register_is_abstract():
    with pytest.raises(NotImplementedError):
        ServiceProvider().register()
