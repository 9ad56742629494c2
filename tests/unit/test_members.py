from __future__ import annotations

import types
from types import SimpleNamespace

import pytest

from tests.factories import activate
from tickprof.core.exceptions import InvalidTargetError
from tickprof.instrument.members import iter_class_members
from tickprof.instrument.wrapper import get_identity, is_wrapped


def add(a, b):
    return a + b


def returns_scope():
    return "scope"


def make_tools() -> type:
    class Tools:
        @staticmethod
        def double(x):
            return 2 * x

        @classmethod
        def make(cls):
            return cls()

        @property
        def name(self):
            return "tools"

        def run(self):
            return "ran"

        class Nested:
            pass

        LIMIT = 3

    return Tools


Tools = make_tools()


def test_register_object_wraps_each_function(profiler) -> None:
    namespace = SimpleNamespace(
        add=add,
        returns_scope=returns_scope,
        does_not_cause_error=3,
        does_not_cause_error2={},
    )

    result = profiler.register_object(namespace, "ns")

    assert result is namespace
    assert is_wrapped(namespace.add)
    assert is_wrapped(namespace.returns_scope)
    assert get_identity(namespace.add).display_name == "ns.add"
    assert namespace.does_not_cause_error == 3
    assert namespace.does_not_cause_error2 == {}
    assert namespace.add(1, 2) == 3


def test_register_object_defaults_label_to_type_name(profiler) -> None:
    namespace = SimpleNamespace(add=add)
    profiler.register_object(namespace)
    assert get_identity(namespace.add).display_name == "SimpleNamespace.add"


def test_register_object_wraps_module_functions(profiler) -> None:
    module = types.ModuleType("fake_module")

    def compute(x):
        return x + 1

    module.compute = compute
    module.CONSTANT = 3

    profiler.register_object(module)
    activate(profiler)

    assert is_wrapped(module.compute)
    assert get_identity(module.compute).display_name == "fake_module.compute"
    assert module.compute(1) == 2
    assert module.CONSTANT == 3
    assert profiler.controller.state.map["fake_module.compute"].calls == 1


def test_register_class_wraps_property_accessors(profiler) -> None:
    class Holder:
        def __init__(self):
            self._value = 5

        @property
        def some_value(self):
            return self._value

        @some_value.setter
        def some_value(self, value):
            self._value = value

    profiler.register_class(Holder, "Holder")

    accessor = Holder.__dict__["some_value"]
    assert isinstance(accessor, property)
    assert is_wrapped(accessor.fget)
    assert is_wrapped(accessor.fset)
    assert accessor.fdel is None
    assert get_identity(accessor.fget).display_name == "Holder.some_value:get"
    assert get_identity(accessor.fset).display_name == "Holder.some_value:set"

    holder = Holder()
    assert holder.some_value == 5
    holder.some_value = 7
    assert holder.some_value == 7


def test_register_class_wraps_prototype_static_and_class_methods(profiler) -> None:
    cls = make_tools()
    nested = cls.Nested
    profiler.register_class(cls, "Tools")
    members = vars(cls)

    assert is_wrapped(members["run"])
    assert isinstance(members["double"], staticmethod)
    assert is_wrapped(members["double"].__func__)
    assert isinstance(members["make"], classmethod)
    assert is_wrapped(members["make"].__func__)
    assert is_wrapped(members["name"].fget)
    assert members["Nested"] is nested
    assert members["LIMIT"] == 3

    activate(profiler)
    assert cls.double(4) == 8
    assert isinstance(cls.make(), cls)
    assert cls().run() == "ran"
    assert cls().name == "tools"
    state = profiler.controller.state
    assert {"Tools.double", "Tools.make", "Tools.run", "Tools.name:get"} <= set(state.map)


def test_class_member_adapter_classifies_kinds() -> None:
    kinds = {member.name: member.kind for member in iter_class_members(Tools)}
    assert kinds["double"] == "static"
    assert kinds["make"] == "class"
    assert kinds["name"] == "accessor"
    assert kinds["run"] == "function"
    assert "Nested" not in kinds
    assert "LIMIT" not in kinds


def test_blacklisted_members_are_left_untouched(make_profiler) -> None:
    profiler = make_profiler(overrides={"instrument": {"blacklist": ["skip_me"]}})

    class Meter:
        def __init__(self):
            self.reads = 0

        def now(self):
            return 1.0

        def skip_me(self):
            return 2.0

        def read(self):
            return 3.0

    profiler.register_class(Meter, "Meter")

    assert type(vars(Meter)["__init__"]) is types.FunctionType
    assert not is_wrapped(vars(Meter)["now"])
    assert not is_wrapped(vars(Meter)["skip_me"])
    assert is_wrapped(vars(Meter)["read"])


def test_registering_twice_keeps_the_first_proxy(profiler) -> None:
    class Widget:
        def ping(self):
            return "pong"

    profiler.register_class(Widget, "Widget")
    first = vars(Widget)["ping"]
    profiler.register_class(Widget, "Widget")

    assert vars(Widget)["ping"] is first


def test_register_object_on_class_delegates_to_register_class(profiler) -> None:
    class Widget:
        def ping(self):
            return "pong"

    assert profiler.register_object(Widget, "Widget") is Widget
    assert is_wrapped(vars(Widget)["ping"])


def test_probing_errors_are_skipped(profiler) -> None:
    class Slotted:
        __slots__ = ("value",)

        @property
        def explodes(self):
            raise RuntimeError("host object refuses probing")

        def method(self):
            return "method"

    target = Slotted()

    assert profiler.register_object(target, "slotted") is target
    assert target.method() == "method"
    with pytest.raises(RuntimeError):
        target.explodes


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(None, id="none"),
        pytest.param(3, id="int"),
        pytest.param(2.5, id="float"),
        pytest.param("text", id="str"),
        pytest.param(b"bytes", id="bytes"),
        pytest.param(True, id="bool"),
    ],
)
def test_registering_primitives_raises(profiler, value) -> None:
    with pytest.raises(InvalidTargetError):
        profiler.register_object(value)
    with pytest.raises(InvalidTargetError):
        profiler.register_class(value)
