"""
Command Descriptor
Immutable command definitions and their option trees.

A command's option tree has one of three shapes:

    /ping [hide]                          root is a Leaf
    /build global [clear]                 root is a Branch of Leafs
    /config bot-log set <channel>         root is a Branch of Groups (and Leafs)

Raw data in the registration API's shape is parsed into these types once, when
the descriptor is built. Anything nested deeper is rejected with SchemaError.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import discord

from commands.errors import SchemaError
from utils.validation import ValidationUtils

OptionType = discord.AppCommandOptionType
CommandType = discord.AppCommandType

# Handler type alias: receives the interaction context
CommandHandler = Callable[[Any], Any]


@dataclass(frozen=True)
class OptionChoice:
    """A fixed choice offered for a string, integer or number option."""

    name: str
    value: Union[str, int, float]

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class CommandOption:
    """An ordinary option field of a command or subcommand."""

    name: str
    description: str
    type: OptionType
    required: bool = False
    choices: Tuple[OptionChoice, ...] = ()
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    channel_types: Tuple[int, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
        }
        if self.required:
            payload["required"] = True
        if self.choices:
            payload["choices"] = [choice.to_payload() for choice in self.choices]
        if self.min_value is not None:
            payload["min_value"] = self.min_value
        if self.max_value is not None:
            payload["max_value"] = self.max_value
        if self.channel_types:
            payload["channel_types"] = list(self.channel_types)
        return payload


@dataclass(frozen=True)
class Leaf:
    """An executable command or subcommand."""

    name: str
    description: str
    options: Tuple[CommandOption, ...] = ()

    def has_option(self, name: str) -> bool:
        return any(option.name == name for option in self.options)

    def with_option(self, option: CommandOption) -> "Leaf":
        return replace(self, options=self.options + (option,))

    def option_payloads(self) -> List[Dict[str, Any]]:
        return [option.to_payload() for option in self.options]

    def to_payload(self) -> Dict[str, Any]:
        """Serialize as a subcommand."""
        return {
            "type": OptionType.subcommand.value,
            "name": self.name,
            "description": self.description,
            "options": self.option_payloads(),
        }


@dataclass(frozen=True)
class Group:
    """A subcommand group holding subcommand leaves."""

    name: str
    description: str
    subcommands: Tuple[Leaf, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": OptionType.subcommand_group.value,
            "name": self.name,
            "description": self.description,
            "options": [leaf.to_payload() for leaf in self.subcommands],
        }


@dataclass(frozen=True)
class Branch:
    """Root of a command that has subcommands and/or subcommand groups."""

    children: Tuple[Union[Group, Leaf], ...]

    def child(self, name: str) -> Optional[Union[Group, Leaf]]:
        for child in self.children:
            if child.name == name:
                return child
        return None


Root = Union[Leaf, Branch]


def iter_leaves(root: Root) -> Iterator[Leaf]:
    """Yield every executable leaf reachable from a root."""
    if isinstance(root, Leaf):
        yield root
        return

    for child in root.children:
        if isinstance(child, Group):
            yield from child.subcommands
        else:
            yield child


@dataclass(frozen=True)
class CommandDescriptor:
    """Definition of a command: name, option tree, visibility default and handler."""

    name: str
    root: Root
    description: str = ""
    command_type: CommandType = CommandType.chat_input
    default_hide: bool = True
    guild_only: bool = False
    default_member_permissions: Optional[str] = None
    handler: Optional[CommandHandler] = field(default=None, compare=False, repr=False)

    @property
    def is_chat_input(self) -> bool:
        return self.command_type == CommandType.chat_input

    def with_root(self, root: Root) -> "CommandDescriptor":
        return replace(self, root=root)

    def leaves(self) -> List[Leaf]:
        if not self.is_chat_input:
            return []
        return list(iter_leaves(self.root))

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the registration API's command object."""
        payload: Dict[str, Any] = {
            "name": self.name,
            "type": self.command_type.value,
        }

        if self.is_chat_input:
            payload["description"] = self.description
            if isinstance(self.root, Leaf):
                payload["options"] = self.root.option_payloads()
            else:
                payload["options"] = [child.to_payload() for child in self.root.children]
        else:
            payload["description"] = ""

        if self.guild_only:
            payload["dm_permission"] = False

        if self.default_member_permissions is not None:
            payload["default_member_permissions"] = self.default_member_permissions

        return payload

    @classmethod
    def from_data(
        cls,
        data: Mapping[str, Any],
        handler: Optional[CommandHandler] = None,
        default_hide: bool = True,
        guild_only: bool = False,
    ) -> "CommandDescriptor":
        """
        Build a descriptor from raw command data.

        Args:
            data: Command data in the registration API's shape
            handler: Callable invoked with the interaction context
            default_hide: Whether output is hidden when no override is given
            guild_only: Whether the command is unavailable in DMs

        Returns:
            Parsed descriptor

        Raises:
            SchemaError: If the data or its option tree is malformed
        """
        if not isinstance(data, Mapping):
            raise SchemaError("command data must be a mapping")

        name = data.get("name")
        command_type = _coerce(CommandType, data.get("type", CommandType.chat_input), name)

        if command_type != CommandType.chat_input:
            if not isinstance(name, str) or not name:
                raise SchemaError("context menu commands need a name")
            if data.get("options"):
                raise SchemaError(f"context menu command '{name}' cannot have options")
            root: Root = Leaf(name=name, description="")
            description = ""
        else:
            _check_name(name)
            description = data.get("description", "")
            _check_description(description, name)
            root = _parse_root(name, description, data.get("options") or [])

        permissions = data.get("default_member_permissions")
        if permissions is not None:
            permissions = str(permissions)
            if not permissions.isdigit():
                raise SchemaError(f"'{name}': default_member_permissions must be a bit set")

        return cls(
            name=name,
            root=root,
            description=description,
            command_type=command_type,
            default_hide=default_hide,
            guild_only=guild_only,
            default_member_permissions=permissions,
            handler=handler,
        )


def _coerce(enum_cls: Any, raw: Any, path: Any) -> Any:
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, bool):
        raise SchemaError(f"invalid {enum_cls.__name__} for '{path}': {raw!r}")
    try:
        return enum_cls(raw)
    except ValueError:
        raise SchemaError(f"invalid {enum_cls.__name__} for '{path}': {raw!r}") from None


def _check_name(name: Any) -> None:
    result = ValidationUtils.validate_command_name(name)
    if not result:
        raise SchemaError(result.error)


def _check_description(description: Any, path: str) -> None:
    result = ValidationUtils.validate_description(description)
    if not result:
        raise SchemaError(f"'{path}': {result.error}")


def _is_subcommand(raw: Mapping[str, Any], path: str) -> bool:
    option_type = _coerce(OptionType, raw.get("type"), path)
    return option_type in (OptionType.subcommand, OptionType.subcommand_group)


def _check_unique(names: List[str], path: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise SchemaError(f"'{path}' declares '{name}' more than once")
        seen.add(name)


def _parse_option(raw: Mapping[str, Any], path: str) -> CommandOption:
    if not isinstance(raw, Mapping):
        raise SchemaError(f"'{path}': options must be mappings")

    name = raw.get("name")
    _check_name(name)
    option_path = f"{path} {name}"
    _check_description(raw.get("description"), option_path)

    option_type = _coerce(OptionType, raw.get("type"), option_path)
    if option_type in (OptionType.subcommand, OptionType.subcommand_group):
        raise SchemaError(f"'{option_path}' is nested too deeply")

    try:
        choices = tuple(
            OptionChoice(name=choice["name"], value=choice["value"])
            for choice in raw.get("choices") or []
        )
    except (KeyError, TypeError):
        raise SchemaError(f"'{option_path}' has malformed choices") from None

    return CommandOption(
        name=name,
        description=raw["description"],
        type=option_type,
        required=bool(raw.get("required", False)),
        choices=choices,
        min_value=raw.get("min_value"),
        max_value=raw.get("max_value"),
        channel_types=tuple(int(getattr(t, "value", t)) for t in raw.get("channel_types") or []),
    )


def _parse_leaf(name: str, description: str, raw_options: List[Mapping[str, Any]], path: str) -> Leaf:
    options = tuple(_parse_option(raw, path) for raw in raw_options)
    _check_unique([option.name for option in options], path)
    return Leaf(name=name, description=description, options=options)


def _parse_subcommand(raw: Mapping[str, Any], path: str) -> Leaf:
    name = raw.get("name")
    _check_name(name)
    sub_path = f"{path} {name}"
    _check_description(raw.get("description"), sub_path)
    return _parse_leaf(name, raw["description"], raw.get("options") or [], sub_path)


def _parse_group(raw: Mapping[str, Any], path: str) -> Group:
    name = raw.get("name")
    _check_name(name)
    group_path = f"{path} {name}"
    _check_description(raw.get("description"), group_path)

    subcommands = []
    for child in raw.get("options") or []:
        if not isinstance(child, Mapping):
            raise SchemaError(f"'{group_path}': options must be mappings")
        child_type = _coerce(OptionType, child.get("type"), group_path)
        if child_type != OptionType.subcommand:
            raise SchemaError(f"subcommand group '{group_path}' may only contain subcommands")
        subcommands.append(_parse_subcommand(child, group_path))

    _check_unique([leaf.name for leaf in subcommands], group_path)
    return Group(name=name, description=raw["description"], subcommands=tuple(subcommands))


def _parse_root(name: str, description: str, raw_options: List[Mapping[str, Any]]) -> Root:
    for raw in raw_options:
        if not isinstance(raw, Mapping):
            raise SchemaError(f"'{name}': options must be mappings")

    nested = [_is_subcommand(raw, name) for raw in raw_options]

    if not any(nested):
        return _parse_leaf(name, description, raw_options, name)

    if not all(nested):
        raise SchemaError(f"'{name}' mixes subcommands with plain options")

    children: List[Union[Group, Leaf]] = []
    for raw in raw_options:
        if _coerce(OptionType, raw.get("type"), name) == OptionType.subcommand_group:
            children.append(_parse_group(raw, name))
        else:
            children.append(_parse_subcommand(raw, name))

    _check_unique([child.name for child in children], name)
    return Branch(children=tuple(children))
