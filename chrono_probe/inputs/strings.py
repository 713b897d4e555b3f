"""Random strings for the fractional period algorithms."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from chrono_probe.errors import InvalidArgument
from chrono_probe.input import Input


class StringGen(Enum):
    """String generation strategies.

    RANDOM       -- every character drawn independently from the set.
    PERIODIC     -- a random prefix of random length repeated up to the size,
                    so the period is usually much shorter than the string.
    ROUND_ROBIN  -- characters of the set in order, cyclically.
    """

    RANDOM = "random"
    PERIODIC = "periodic"
    ROUND_ROBIN = "round_robin"


@dataclass(frozen=True)
class StringConfig:
    method: StringGen = StringGen.RANDOM
    char_set: tuple[str, ...] = ("a", "b")

    def __post_init__(self) -> None:
        chars = tuple(self.char_set)
        if not chars:
            raise InvalidArgument("the character set must not be empty")
        if len(set(chars)) != len(chars):
            raise InvalidArgument("the character set contains repetitions")
        for c in chars:
            if len(c) != 1:
                raise InvalidArgument(f"character set entries must be single characters: {c!r}")
            if not c.isascii():
                raise InvalidArgument(f"the character set contains a non ascii character: {c!r}")
        object.__setattr__(self, "char_set", chars)


@dataclass
class StringInput(Input):
    text: str

    def size(self) -> int:
        return len(self.text)

    @classmethod
    def generate(cls, size: int, config: StringConfig | None = None) -> "StringInput":
        if size < 1:
            raise InvalidArgument("the length of the string to be generated must be greater than 0")
        config = config or StringConfig()
        chars = config.char_set
        if config.method is StringGen.RANDOM:
            text = "".join(random.choice(chars) for _ in range(size))
        elif config.method is StringGen.PERIODIC:
            q = random.randint(1, size)
            prefix = "".join(random.choice(chars) for _ in range(q))
            text = (prefix * (size // q + 1))[:size]
        else:
            text = "".join(chars[i % len(chars)] for i in range(size))
        return cls(text)

    def clone(self) -> "StringInput":
        return StringInput(self.text)
