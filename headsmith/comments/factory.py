# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import PurePath

from headsmith.comments import BlockComment, Comment, LineComment
from headsmith.errors import ConfigError
from headsmith.log import get_child_logger

log = get_child_logger("comments")

DEFAULT_COLUMNS = 80
DEFAULT_TRAILING_LINES = 1

# built-in line comment styles, by comment character
_line_styles = {
    "#": [
        "py", "pyi", "pyx", "sh", "bash", "zsh", "fish", "ksh", "rb", "pl", "pm", "r", "jl", "nim", "cr", "ex", "exs",
        "yml", "yaml", "toml", "cfg", "conf", "ini", "mk", "cmake", "dockerfile", "tf", "nix", "ps1", "awk", "sed",
        "gitignore"
    ],
    "//": [
        "rs", "go", "c", "h", "cc", "cpp", "cxx", "hh", "hpp", "hxx", "java", "js", "mjs", "cjs", "jsx", "ts", "tsx",
        "kt", "kts", "swift", "scala", "sc", "cs", "dart", "groovy", "gradle", "php", "proto", "zig", "v", "sv"
    ],
    "--": ["sql", "lua", "hs", "elm", "ada", "adb", "ads", "vhd", "vhdl"],
    ";;": ["el", "lisp", "clj", "cljs", "cljc", "scm", "rkt"],
    "%": ["tex", "sty", "cls", "erl", "hrl", "m"],
    "\"": ["vim"],
}

# built-in block comment styles, as (start, per line, end)
_block_styles = {
    ("/*", " *", " */"): ["css", "scss", "less"],
    ("<!--", None, "-->"): ["html", "htm", "xhtml", "xml", "xsd", "xsl", "svg", "vue", "svelte"],
    ("(*", None, "*)"): ["ml", "mli", "sml", "pas"],
    ("{-", None, "-}"): ["purs"],
}

# files without extension, by (lower case) name
_file_names = {
    "makefile": "mk",
    "gnumakefile": "mk",
    "dockerfile": "dockerfile",
    "containerfile": "dockerfile",
    "cmakelists.txt": "cmake",
    "justfile": "mk",
    "vagrantfile": "rb",
    "gemfile": "rb",
    "rakefile": "rb",
}

# interpreters named in a shebang line, mapped to an extension
_interpreters = {
    "python": "py",
    "sh": "sh",
    "bash": "sh",
    "dash": "sh",
    "zsh": "sh",
    "ksh": "sh",
    "fish": "fish",
    "ruby": "rb",
    "perl": "pl",
    "node": "js",
    "deno": "ts",
    "lua": "lua",
    "rscript": "r",
    "julia": "jl",
    "php": "php",
    "awk": "awk",
    "gawk": "awk",
    "sed": "sed",
    "elixir": "exs",
    "make": "mk",
    "tclsh": "sh",
    "pwsh": "ps1",
}

# a shebang is only ever the first line, `#![` starts a Rust inner attribute
SHEBANG_PATTERN = re.compile(r"#!(?!\[)[^\n]*(?:\n|$)")

# lines which have to stay in front of the header, after a shebang
PREAMBLE_PATTERNS = [
    # PEP 263 and Emacs/Vim style encoding declarations
    re.compile(r"[ \t\f]*#[^\n]*coding[:=][ \t]*[-\w.]+[^\n]*(?:\n|$)"),
    re.compile(r"<\?xml[^\n]*\?>[^\n]*(?:\n|$)"),
    re.compile(r"<!DOCTYPE[^\n]*>[^\n]*(?:\n|$)", re.IGNORECASE),
    re.compile(r"<\?php[^\n]*(?:\n|$)"),
]


def is_shebang(line: str) -> bool:
    return SHEBANG_PATTERN.match(line) is not None


def split_preamble(content: str) -> tuple[str, str]:
    """Split the lines off a file that must stay in front of a header.

    Args:
        content (str): The file content.

    Returns:
        tuple(str, str): The preamble (possibly empty) and the remaining content.
    """
    match = SHEBANG_PATTERN.match(content)
    end = match.end() if match else 0
    # at most one more line, e.g. an encoding declaration
    for pattern in PREAMBLE_PATTERNS:
        match = pattern.match(content, end)
        if match and match.end() > end:
            end = match.end()
            break
    return content[:end], content[end:]


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def _interpreter_extension(first_line: str) -> str | None:
    args = first_line[2:].split()
    if not args:
        return None
    name = PurePath(args[0]).name
    if name == "env":
        # skip options like `-S`
        rest = [a for a in args[1:] if not a.startswith("-") and "=" not in a]
        if not rest:
            return None
        name = rest[0]
    name = name.lower()
    if name in _interpreters:
        return _interpreters[name]
    # versioned interpreters, e.g. python3.12
    return _interpreters.get(re.sub(r"[0-9.]+$", "", name))


def extension_of(path: str | PurePath, first_line: str | None = None) -> str:
    """Determine the extension used to select the comment style of a file.

    Falls back to well known file names and the interpreter of a shebang line
    for files without extension.

    Returns:
        str: Lower case extension without leading dot, empty if unknown.
    """
    pure_path = PurePath(path)
    suffix = _normalize_extension(pure_path.suffix)
    if suffix:
        return suffix
    name = pure_path.name.lower()
    if name in _file_names:
        return _file_names[name]
    if name.startswith("."):
        return _normalize_extension(name)
    if first_line and is_shebang(first_line):
        return _interpreter_extension(first_line) or ""
    return ""


def create_commenter(raw: Mapping) -> Comment:
    """Create a comment style from its configuration.

    Args:
        raw (Mapping): A `commenter` config section.

    Raises:
        ConfigError: If characters required by the comment type are missing.
    """
    type_ = raw.get("type", "line")
    trailing_lines = raw.get("trailing_lines", 0)
    match type_:
        case "line":
            comment_char = raw.get("comment_char")
            if not comment_char:
                raise ConfigError("A line commenter requires 'comment_char'", ["missing option 'comment_char'."])
            return LineComment(comment_char, trailing_lines=trailing_lines)
        case "block":
            start_block_char = raw.get("start_block_char")
            end_block_char = raw.get("end_block_char")
            if not (start_block_char and end_block_char):
                raise ConfigError("A block commenter requires 'start_block_char' and 'end_block_char'", [
                    f"missing option '{name}'."
                    for name, value in [("start_block_char", start_block_char), ("end_block_char", end_block_char)]
                    if not value
                ])
            return BlockComment(start_block_char,
                                end_block_char,
                                per_line_char=raw.get("per_line_char"),
                                trailing_lines=trailing_lines)
        case _:
            raise ConfigError(f"Unknown commenter type '{type_}'", [f"invalid option 'type': {type_}"])


@dataclass(slots=True, frozen=True)
class CommentConfig:
    """A comment style together with the files it applies to."""

    commenter: Comment
    extensions: frozenset[str] | None = None
    """`None` stands for any extension."""
    files: re.Pattern | None = None
    columns: int | None = DEFAULT_COLUMNS

    @classmethod
    def from_dict(cls, raw: Mapping) -> CommentConfig:
        extensions = raw.get("extensions", "any")
        if isinstance(extensions, str):
            extensions = None if extensions == "any" else [extensions]
        files = raw.get("files")
        return cls(
            commenter=create_commenter(raw["commenter"]),
            extensions=None if extensions is None else frozenset(_normalize_extension(e) for e in extensions),
            files=re.compile(files) if files else None,
            columns=raw.get("columns"),
        )

    @property
    def is_fallback(self) -> bool:
        return self.extensions is None and self.files is None

    def matches(self, path: str, extension: str) -> bool:
        if self.files is not None and not self.files.search(path):
            return False
        return self.extensions is None or extension in self.extensions


def _init_default_comments() -> dict[str, CommentConfig]:
    defaults = {}
    for comment_char, extensions in _line_styles.items():
        config = CommentConfig(LineComment(comment_char, trailing_lines=DEFAULT_TRAILING_LINES),
                               extensions=frozenset(extensions))
        defaults.update({e: config for e in extensions})
    for (start, per_line, end), extensions in _block_styles.items():
        config = CommentConfig(BlockComment(start, end, per_line_char=per_line, trailing_lines=DEFAULT_TRAILING_LINES),
                               extensions=frozenset(extensions))
        defaults.update({e: config for e in extensions})
    return defaults


_default_comments = _init_default_comments()


class CommentFactory:
    """Look up the comment style of a file.

    Configured entries restricted to some extensions or files are checked
    first, in their given order, then the built-in styles and last the
    configured entries for any file.

    Args:
        comment_configs (Iterable[CommentConfig]): Configured comment styles.
    """

    def __init__(self, comment_configs: Iterable[CommentConfig] = ()) -> None:
        configs = list(comment_configs)
        self._specific = [c for c in configs if not c.is_fallback]
        self._fallback = [c for c in configs if c.is_fallback]

    @classmethod
    def from_config(cls, raw_comments: Iterable[Mapping]) -> CommentFactory:
        return cls(CommentConfig.from_dict(raw) for raw in raw_comments)

    @classmethod
    def list_default_extensions(cls) -> list[str]:
        return sorted(_default_comments)

    def get(self, path: str, first_line: str | None = None) -> CommentConfig | None:
        """Get the comment style for a file.

        Args:
            path (str): Path of the file.
            first_line (str | None): First line of the file, used to detect
                the interpreter of extensionless scripts.

        Returns:
            CommentConfig | None: The matching style, `None` if there is none.
        """
        extension = extension_of(path, first_line)
        for config in self._specific:
            if config.matches(path, extension):
                return config
        if extension in _default_comments:
            return _default_comments[extension]
        if self._fallback:
            return self._fallback[0]
        log.debug("no comment style for '%s' (extension: '%s')", path, extension)
        return None
