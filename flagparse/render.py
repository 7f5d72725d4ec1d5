"""
Flagparse help and version renderers.

These are collaborators of the parser, not part of the pipeline: Schema.parse()
only reaches them through its helper/versioner hooks, and they only read the
schema's public properties.

Help layout
    <name>
    Author: <author>
    Version: <version>
    <description>
    Usage:
        -<short>, --<long>: <description>      (one per top-level argument, sorted by name)

    Commands:
        <name>: <description>                  (only when subcommands exist)

Version layout
    <name> Version: <version>
    No version information provided by program.   (when no version is set)

Styling
- Palette keys: program-name, label, author, version, description, usage-label,
  flag-name, argument-description, commands-label, command-name,
  command-description, notice.
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the schema is not colorful, styling is suppressed.
"""
import operator
from collections import defaultdict

from rich.text import Text

from .utils import coalesce, Unset


def _styler(schema):
    styles = defaultdict(str, {
        # === Head sections ===
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "label": "bold #FFFFFF",
        "author": "#9CA3AF",
        "version": "bold #00E6FF",
        "description": "italic #A3A3A3",

        # === Arguments ===
        "usage-label": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "argument-description": "#9CA3AF",

        # === Commands ===
        "commands-label": "bold #FFFFFF",
        "command-name": "bold #36C5F0",
        "command-description": "#9CA3AF",

        # === Notices ===
        "notice": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if schema.colorful else ""

    return styler


def helprender(schema, /):
    """
    Build the help text of a schema as a rich Text.
    """
    styler = _styler(schema)
    lines = []

    if schema.name:
        lines.append(Text(schema.name, styler("program-name")))
    if schema.author:
        lines.append(Text.assemble(("Author", styler("label")), ": ", (schema.author, styler("author"))))
    if schema.version:
        lines.append(Text.assemble(("Version", styler("label")), ": ", (schema.version, styler("version"))))
    if schema.description:
        lines.append(Text(schema.description, styler("description")))

    lines.append(Text("Usage:", styler("usage-label")))
    for argument in sorted(schema.arguments, key=operator.attrgetter("name")):
        line = Text("    ")
        line.append_text(Text(", ").join(Text(flag, styler("flag-name")) for flag in argument.flags))
        line.append(":")
        if argument.descr:
            line.append(" ")
            line.append(argument.descr, styler("argument-description"))
        lines.append(line)

    if schema.commands:
        lines.append(Text(""))
        lines.append(Text("Commands:", styler("commands-label")))
        for command in schema.commands:
            line = Text("    ")
            line.append(command.name, styler("command-name"))
            line.append(":")
            if command.descr:
                line.append(" ")
                line.append(command.descr, styler("command-description"))
            lines.append(line)

    return Text("\n").join(lines)


def versionrender(schema, /):
    """
    Build the version text of a schema as a rich Text.
    """
    styler = _styler(schema)
    if not schema.version:
        return Text("No version information provided by program.", styler("notice"))

    version = Text()
    if schema.name:
        version.append(schema.name, styler("program-name")).append(" ")
    version.append("Version", styler("label")).append(": ")
    version.append(schema.version, styler("version"))
    return version


def helptext(schema, /):
    """
    Plain help text (no styles).
    """
    return helprender(schema).plain


def versiontext(schema, /):
    """
    Plain version text (no styles).
    """
    return versionrender(schema).plain


def printhelp(schema, /, console=Unset):
    """
    Print the help text through `console` (default: the schema's console).
    """
    coalesce(console, schema.console).print(helprender(schema), highlight=False, soft_wrap=True)


def printversion(schema, /, console=Unset):
    """
    Print the version text through `console` (default: the schema's console).
    """
    coalesce(console, schema.console).print(versionrender(schema), highlight=False, soft_wrap=True)


__all__ = (
    "helprender",
    "versionrender",
    "helptext",
    "versiontext",
    "printhelp",
    "printversion",
)
