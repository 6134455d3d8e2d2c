"""Naming conventions shared by generators and destroyers.

Both sides must derive the same names from the same input, otherwise
`volt destroy` would miss files that `volt generate` created.
"""

from __future__ import annotations

import re

_WORD_SPLIT = re.compile(r"[_\-\s]+")
_VOWELS = frozenset("aeiou")


def to_pascal_case(name: str) -> str:
    """`blog_post` / `blog-post` / `blogPost` -> `BlogPost`.

    Only the first letter of each part is touched, so `BlogPost` is stable.
    """

    parts = [p for p in _WORD_SPLIT.split(name.strip()) if p]
    return "".join(p[0].upper() + p[1:] for p in parts)


def to_snake_case(name: str) -> str:
    """`BlogPost` -> `blog_post`; `-` and spaces become `_`."""

    if not name:
        return name

    out: list[str] = []
    for i, ch in enumerate(name.strip()):
        if ch in "- ":
            out.append("_")
        elif ch.isupper() and i > 0 and out and out[-1] != "_":
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch.lower())
    return re.sub(r"_+", "_", "".join(out))


def pluralize(singular: str) -> str:
    if not singular:
        return singular

    if singular.endswith(("s", "x", "z", "sh", "ch")):
        return f"{singular}es"
    if singular.endswith("y") and len(singular) > 1 and singular[-2].lower() not in _VOWELS:
        return f"{singular[:-1]}ies"
    return f"{singular}s"


def to_table_name(model_name: str) -> str:
    return pluralize(to_snake_case(model_name))


def to_route_path(model_name: str) -> str:
    return to_table_name(model_name)


def ensure_suffix(name: str, suffix: str) -> str:
    pascal = to_pascal_case(name)
    return pascal if pascal.endswith(suffix) else f"{pascal}{suffix}"


def ensure_controller_suffix(name: str) -> str:
    return ensure_suffix(name, "Controller")


def ensure_mailer_suffix(name: str) -> str:
    return ensure_suffix(name, "Mailer")


def ensure_channel_suffix(name: str) -> str:
    return ensure_suffix(name, "Channel")


def resource_controller_name(model_name: str) -> str:
    """Scaffold controllers are plural: `Post` -> `PostsController`."""

    return f"{pluralize(to_pascal_case(model_name))}Controller"


def module_name(class_name: str) -> str:
    """File stem for a generated class: `PostsController` -> `posts_controller`."""

    return to_snake_case(class_name)
