"""
Option Tree Normalizer
Ensures every executable leaf of a command carries exactly one "hide" option
"""

from typing import Callable, Union

from commands.descriptor import (
    Branch,
    CommandDescriptor,
    CommandOption,
    Group,
    Leaf,
    OptionType,
    Root,
)

HIDE_OPTION = "hide"

# Resolves the default visibility for a command name
VisibilityResolver = Callable[[str], bool]


def hide_option(default: bool) -> CommandOption:
    """Build the hide option advertising the given default."""
    return CommandOption(
        name=HIDE_OPTION,
        description=f"Hide the output. Default is {str(default).lower()}",
        type=OptionType.boolean,
    )


class OptionTreeNormalizer:
    """Injects the hide option into every leaf of a descriptor's option tree."""

    def __init__(self, resolve_default: VisibilityResolver):
        self.resolve_default = resolve_default

    def normalize(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        """
        Return a descriptor whose every leaf has a hide option.

        Context menu commands are returned unchanged. Leaves that already have
        an option named "hide" are left as they are, so this is idempotent.
        """
        if not descriptor.is_chat_input:
            return descriptor

        option = hide_option(self.resolve_default(descriptor.name))
        root = self._normalize_root(descriptor.root, option)

        if root == descriptor.root:
            return descriptor
        return descriptor.with_root(root)

    def _normalize_root(self, root: Root, option: CommandOption) -> Root:
        if isinstance(root, Leaf):
            return self._add_hide_option(root, option)

        if isinstance(root, Branch):
            return Branch(children=tuple(
                self._normalize_child(child, option) for child in root.children
            ))

        raise TypeError(f"Unsupported option tree root: {type(root).__name__}")

    def _normalize_child(self, child: Union[Group, Leaf], option: CommandOption) -> Union[Group, Leaf]:
        if isinstance(child, Group):
            return Group(
                name=child.name,
                description=child.description,
                subcommands=tuple(self._add_hide_option(leaf, option) for leaf in child.subcommands),
            )

        if isinstance(child, Leaf):
            return self._add_hide_option(child, option)

        raise TypeError(f"Unsupported option tree node: {type(child).__name__}")

    @staticmethod
    def _add_hide_option(leaf: Leaf, option: CommandOption) -> Leaf:
        """Adds the hide option to a leaf, if none present."""
        if leaf.has_option(HIDE_OPTION):
            return leaf
        return leaf.with_option(option)
