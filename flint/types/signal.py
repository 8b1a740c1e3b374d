"""Control signals produced by statement execution.

Executing a statement yields None (fall through), a Return carrying the
returned value, or BREAK. Signals are ordinary return values passed back up
through blocks, conditionals and loops; they are never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from flint.types.value import Value


@dataclass(frozen=True)
class Return:
    value: Value


class Break:
    __slots__ = ()

    def __repr__(self) -> str:
        return "BREAK"


BREAK = Break()

Signal = Optional[Union[Return, Break]]
