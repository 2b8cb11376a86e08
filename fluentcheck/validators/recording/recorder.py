"""Recording objects — learn a field name from an accessor expression.

``given(lambda order: order.amount)`` should produce the path segment
``amount`` without the caller spelling it out. To get there the accessor is
run once against a RecordingObject: a stand-in for the declared type that
remembers which public member was read last.

    recorder = Recorder.create(Order)
    (lambda order: order.customer.name)(recorder.object)
    recorder.current_property_name()   # -> "name"

Member types come from type hints (class annotations, property and method
return annotations). Reading a member whose type is a plain class hands out
another recording object, so chained access resolves to the last member.
Reading a member of a terminal type (numbers, strings, containers...) hands
out a neutral placeholder; reading an unannotated member hands out an untyped
recording object that accepts anything.
"""

import inspect
import re
import types
import typing
from typing import Any, Callable, Optional, Union

import structlog

from fluentcheck.validators.errors import InvalidAccessor
from fluentcheck.validators.recording.defaults import get_default, is_terminal

logger = structlog.get_logger()

# Public identifiers only; private and dunder names are not accessors
ACCESSOR_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

# "get_amount" and "getAmount" both read the "amount" property
GETTER_PREFIX_PATTERN = re.compile(r"^get(?:_(?=[A-Za-z])|(?=[A-Z0-9]))")


class Recorder:
    """Owns a recording object and the name of the member last read through it."""

    def __init__(self, declared_type: Optional[type]):
        self.last_accessed: Optional[str] = None
        self.object = RecordingObject(declared_type, self)

    @classmethod
    def create(cls, declared_type: Optional[type]) -> "Recorder":
        """New recorder whose ``object`` stands in for ``declared_type``."""
        return cls(declared_type)

    def record(self, member_name: str) -> None:
        self.last_accessed = member_name

    def current_property_name(self) -> str:
        """Path segment for the last member read through ``self.object``.

        Raises:
            InvalidAccessor: nothing was read, or the member is not public.
        """
        return to_property_name(self.object.__current_property_name__())


class RecordingObject:
    """Stand-in for an instance of ``declared_type`` that records member access.

    Exposes no public names of its own, so every public member of the declared
    type reaches ``__getattr__``.
    """

    __slots__ = ("_declared_type", "_recorder")

    def __init__(self, declared_type: Optional[type], recorder: Recorder):
        self._declared_type = declared_type
        self._recorder = recorder

    def __current_property_name__(self) -> Optional[str]:
        """Reflexive query: the raw member name recorded so far, not itself recorded."""
        return object.__getattribute__(self, "_recorder").last_accessed

    def __getattr__(self, name: str) -> Any:
        # Protocol probes (copy, pickle, hasattr on dunders) are not accessor calls
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)

        recorder = object.__getattribute__(self, "_recorder")
        declared_type = object.__getattribute__(self, "_declared_type")
        recorder.record(name)

        if declared_type is None:
            return RecordingObject(None, recorder)
        return _member_stand_in(declared_type, name, recorder)

    def __call__(self, *args: Any, **kwargs: Any) -> "RecordingObject":
        # Calling an untyped member, e.g. o.get_amount() on an unannotated class
        return RecordingObject(None, object.__getattribute__(self, "_recorder"))

    def __repr__(self) -> str:
        declared_type = object.__getattribute__(self, "_declared_type")
        type_name = declared_type.__name__ if declared_type is not None else "untyped"
        return f"<RecordingObject {type_name}>"


def to_property_name(member_name: Optional[str]) -> str:
    """Turn a recorded member name into a path segment.

    ``get_amount`` / ``getAmount`` / ``amount`` -> ``amount``; ``getX`` -> ``x``.
    """
    if member_name is None or not ACCESSOR_NAME_PATTERN.match(member_name):
        raise InvalidAccessor(member_name)

    name = GETTER_PREFIX_PATTERN.sub("", member_name, count=1)
    return name[:1].lower() + name[1:]


def name_of(accessor: Callable[[Any], Any], declared_type: type) -> str:
    """Path segment of the member that ``accessor`` reads from a ``declared_type`` instance.

    Args:
        accessor: One-argument callable, e.g. ``lambda order: order.amount``
            or an unbound getter such as ``Order.get_amount``
        declared_type: Type of the object the accessor is applied to

    Returns:
        The property-style name of the last member read

    Raises:
        InvalidAccessor: the accessor read no public member
    """
    recorder = Recorder.create(declared_type)
    if _is_method_of(accessor, declared_type):
        # Unbound getter: record the call itself instead of running its body
        getattr(recorder.object, accessor.__name__)()
    else:
        accessor(recorder.object)
    property_name = recorder.current_property_name()

    logger.debug(
        "accessor_resolved",
        declared_type=declared_type.__name__,
        member=recorder.last_accessed,
        property_name=property_name,
    )
    return property_name


def _is_method_of(accessor: Callable[[Any], Any], declared_type: type) -> bool:
    name = getattr(accessor, "__name__", None)
    if not name or not inspect.isfunction(accessor):
        return False
    return inspect.getattr_static(declared_type, name, None) is accessor


# ── Stand-in construction ──

def _member_stand_in(declared_type: type, name: str, recorder: Recorder) -> Any:
    """Value handed out when ``name`` is read from a recording ``declared_type``."""
    member = inspect.getattr_static(declared_type, name, None)

    if isinstance(member, property):
        return _stand_in(_return_hint(member.fget), recorder)

    if isinstance(member, (staticmethod, classmethod)):
        member = member.__func__

    if inspect.isroutine(member):
        return_hint = _return_hint(member)
        return lambda *args, **kwargs: _stand_in(return_hint, recorder)

    return _stand_in(_type_hints(declared_type).get(name), recorder)


def _stand_in(hint: Any, recorder: Recorder) -> Any:
    """Recording object, placeholder or untyped recording object for a type hint."""
    declared_type = _unwrap(hint)

    if declared_type is None or not isinstance(declared_type, type):
        return RecordingObject(None, recorder)
    if is_terminal(declared_type):
        return get_default(declared_type)
    return RecordingObject(declared_type, recorder)


def _unwrap(hint: Any) -> Optional[type]:
    """Reduce Optional / Annotated / generic aliases to a plain class."""
    if hint is None or hint is Any:
        return None

    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return _unwrap(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _unwrap(members[0]) if members else type(None)
    if origin is not None:
        # list[int], dict[str, Order], Iterable[str]...
        return origin if isinstance(origin, type) else None
    return hint


def _return_hint(function: Optional[Callable[..., Any]]) -> Any:
    if function is None:
        return None
    try:
        return typing.get_type_hints(function).get("return")
    except (NameError, TypeError):
        return None


def _type_hints(declared_type: type) -> dict[str, Any]:
    """Evaluated class annotations along the MRO, subclasses winning.

    Classes are resolved one at a time so that a base class with annotations
    that only exist for type checkers (pydantic's BaseModel, for one) doesn't
    hide the annotations of the class being recorded.
    """
    hints: dict[str, Any] = {}
    for klass in reversed(declared_type.__mro__):
        try:
            hints.update(inspect.get_annotations(klass, eval_str=True))
        except (NameError, TypeError, SyntaxError):
            continue
    return hints
