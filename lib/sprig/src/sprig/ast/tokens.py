from __future__ import annotations

from typing import Union

import msgspec


class TokenBase(msgspec.Struct, frozen=True):
    # character offset of the token in the template source
    offset: int = 0


class Text(TokenBase, frozen=True, tag="text"):
    content: str = ""


class Open(TokenBase, frozen=True, tag="open"):
    name: str = ""
    args: str = ""


class Close(TokenBase, frozen=True, tag="close"):
    name: str = ""


Token = Union[Text, Open, Close]
