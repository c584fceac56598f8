"""Middleware chain — ordered frames composed around a terminal handler.

Composition is outer-first: the first frame registered is the outermost
wrapper. It sees the request before any other frame and regains control
after every inner frame has returned::

    chain = MiddlewareChain()
    chain.use(AccessControlMiddleware())   # runs first
    chain.use(RequestLogger())             # runs second
    handler = chain.build(dispatch)
"""

from roost.middleware.protocol import Frame, Handler


class MiddlewareChain:
    """An ordered, build-once sequence of middleware frames."""

    __slots__ = ("_built", "_frames")

    def __init__(self, frames: tuple[Frame, ...] = ()) -> None:
        self._frames: list[Frame] = list(frames)
        self._built = False

    def use(self, frame: Frame) -> None:
        """Append *frame*. The chain must not have been built yet."""
        if self._built:
            msg = "Cannot add middleware after the chain has been built."
            raise RuntimeError(msg)
        self._frames.append(frame)

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def build(self, terminal: Handler) -> Handler:
        """Wrap *terminal* in every frame and freeze the chain."""
        handler = terminal
        for frame in reversed(self._frames):
            handler = frame(handler)
        self._built = True
        return handler
