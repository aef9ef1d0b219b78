## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Object


class Environment:
    """One frame of the lexical scope chain.  Frames are shared by reference: every closure
    created in a frame, and every call of such a closure, points back at the same `outer`.
    """

    __slots__ = ('store', 'outer')

    def __init__(self, outer: 'Environment | None' = None):
        self.store: dict[str, 'Object'] = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer)

    def get(self, name: str) -> 'Object | None':
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: 'Object') -> 'Object':
        # Always the innermost frame; outer bindings are shadowed, never overwritten.
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        env = self
        while env is not None:
            if name in env.store:
                return True
            env = env.outer
        return False

    def __repr__(self):
        depth, env = 0, self.outer
        while env is not None:
            depth, env = depth + 1, env.outer
        return f"<Environment {sorted(self.store)} depth={depth}>"
