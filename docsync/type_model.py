"""Declarations supplied by the introspection front end for one framework."""

from __future__ import annotations

from dataclasses import dataclass, field

from docsync.errors import DataInconsistencyError


@dataclass(frozen=True)
class AttributeDecl:
    """A custom attribute already rendered per output language."""

    renderings: dict[str, str]

    def text(self, language: str = "C#") -> str | None:
        """Return the rendering for ``language`` if the front end produced one."""
        return self.renderings.get(language)


@dataclass(frozen=True)
class ParameterDecl:
    """One positional parameter."""

    name: str
    type: str
    ref_kind: str = ""  # "", ref, out, in, this
    attributes: tuple[AttributeDecl, ...] = ()


@dataclass(frozen=True)
class ConstraintDecl:
    """A generic constraint on a base type or an interface."""

    type_name: str
    is_interface: bool = False


@dataclass(frozen=True)
class GenericParameterDecl:
    """A generic type parameter with its constraints."""

    name: str
    constraints: tuple[ConstraintDecl, ...] = ()
    # Contravariant, Covariant, DefaultConstructorConstraint, ...
    flags: tuple[str, ...] = ()
    attributes: tuple[AttributeDecl, ...] = ()


@dataclass(frozen=True)
class InterfaceMemberRef:
    """An interface member implemented by a type member."""

    interface: str
    member_id: str
    interface_is_public: bool = True


@dataclass(frozen=True)
class TypeForward:
    """One hop of an assembly type-forward."""

    from_assembly: str
    from_version: str
    to_assembly: str
    to_version: str


@dataclass(frozen=True)
class _MemberBase:
    name: str
    ids: dict[str, str | None] = field(default_factory=dict, hash=False)
    usage: dict[str, str] = field(default_factory=dict, hash=False)
    attributes: tuple[AttributeDecl, ...] = ()
    explicit_interface: str | None = None
    explicit_interface_is_public: bool = True


@dataclass(frozen=True)
class ConstructorDecl(_MemberBase):
    """An instance or static constructor."""

    parameters: tuple[ParameterDecl, ...] = ()


@dataclass(frozen=True)
class MethodDecl(_MemberBase):
    """A method, operator or accessor-free method-like member."""

    parameters: tuple[ParameterDecl, ...] = ()
    return_type: str = "System.Void"
    return_ref_kind: str = ""
    return_attributes: tuple[AttributeDecl, ...] = ()
    type_parameters: tuple[GenericParameterDecl, ...] = ()
    is_extension: bool = False


@dataclass(frozen=True)
class PropertyDecl(_MemberBase):
    """A property or indexer."""

    type: str = "System.Object"
    parameters: tuple[ParameterDecl, ...] = ()


@dataclass(frozen=True)
class FieldDecl(_MemberBase):
    """A field; ``const_value`` is set for literal fields."""

    type: str = "System.Object"
    const_value: str | None = None


@dataclass(frozen=True)
class EventDecl(_MemberBase):
    """An event."""

    type: str = "System.EventHandler"


MemberDecl = ConstructorDecl | MethodDecl | PropertyDecl | FieldDecl | EventDecl


@dataclass(frozen=True)
class TypeDecl:
    """A type of one framework snapshot together with its public members."""

    full_name: str
    name: str
    namespace: str
    kind: str  # Class, Structure, Interface, Enumeration, Delegate
    assembly_name: str
    assembly_version: str = "0.0.0.0"
    assembly_culture: str = ""
    base_type: str | None = None
    base_type_arguments: tuple[tuple[str, str], ...] = ()
    interfaces: tuple[str, ...] = ()
    type_parameters: tuple[GenericParameterDecl, ...] = ()
    attributes: tuple[AttributeDecl, ...] = ()
    members: tuple[MemberDecl, ...] = ()
    ids: dict[str, str | None] = field(default_factory=dict, hash=False)
    usage: dict[str, str] = field(default_factory=dict, hash=False)
    forwards: tuple[TypeForward, ...] = ()
    declaring_type: TypeDecl | None = None
    interface_map: dict[str, tuple[InterfaceMemberRef, ...]] = field(
        default_factory=dict, hash=False
    )
    invoke: MethodDecl | None = None  # delegates only

    @property
    def is_delegate(self) -> bool:
        """Check whether the type is a delegate."""
        return self.kind == "Delegate"

    @property
    def is_enum(self) -> bool:
        """Check whether the type is an enumeration."""
        return self.kind == "Enumeration"


def member_kind(decl: MemberDecl) -> str:
    """Return the persisted MemberType value for a declaration."""
    match decl:
        case ConstructorDecl():
            return "Constructor"
        case MethodDecl():
            return "Method"
        case PropertyDecl():
            return "Property"
        case FieldDecl():
            return "Field"
        case EventDecl():
            return "Event"
    msg = f"Unknown member declaration: {decl!r}"
    raise DataInconsistencyError(msg)


def member_parameters(decl: MemberDecl) -> tuple[ParameterDecl, ...] | None:
    """Return the parameter list, or None for members that never have one."""
    match decl:
        case ConstructorDecl() | MethodDecl():
            return decl.parameters
        case PropertyDecl():
            return decl.parameters or None
        case FieldDecl() | EventDecl():
            return None
    msg = f"Unknown member declaration: {decl!r}"
    raise DataInconsistencyError(msg)


def member_return_type(decl: MemberDecl) -> str | None:
    """Return the documented return type, or None for constructors."""
    match decl:
        case ConstructorDecl():
            return None
        case MethodDecl():
            return decl.return_type
        case PropertyDecl() | FieldDecl() | EventDecl():
            return decl.type
    msg = f"Unknown member declaration: {decl!r}"
    raise DataInconsistencyError(msg)


def member_type_parameters(decl: MemberDecl) -> tuple[GenericParameterDecl, ...]:
    """Return generic parameters declared by the member itself."""
    if isinstance(decl, MethodDecl):
        return decl.type_parameters
    return ()


def _generic_suffix(decl: MemberDecl) -> str:
    names = [t.name for t in member_type_parameters(decl)]
    return f"<{','.join(names)}>" if names else ""


def member_name(decl: MemberDecl) -> str:
    """Return the MemberName: interface-qualified for explicit implementations."""
    if isinstance(decl, ConstructorDecl):
        return ".ctor"
    if decl.explicit_interface:
        return f"{decl.explicit_interface}.{decl.name}{_generic_suffix(decl)}"
    return f"{decl.name}{_generic_suffix(decl)}"


def explicit_member_name(decl: MemberDecl) -> str | None:
    """Return the plain name of an explicit implementation, else None."""
    if not decl.explicit_interface:
        return None
    return f"{decl.name}{_generic_suffix(decl)}"


def is_private_explicit_implementation(decl: MemberDecl) -> bool:
    """Check for an explicit implementation of a non-public interface."""
    return bool(decl.explicit_interface) and not decl.explicit_interface_is_public
