"""Frame tree: parent/child resolution and state composition.

Frames name their parent by string only.  :class:`FrameTree` collects
frames, resolves those weak links into a parent-before-child update order,
and composes states along the tree so that any frame can be expressed in
an ancestor or in any other frame sharing a root.

Frames may be added in any order; parent links are checked when the update
order is computed.  The order is cached until a frame is added or removed.
Changing ``parent_name`` on a frame already in the tree does not invalidate
the cache; remove and re-add the frame instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from framekit.errors import FrameTreeError
from framekit.frames.composition import compose_states, relative_state
from framekit.frames.reference_frame import ReferenceFrame

logger = logging.getLogger(__name__)


class FrameTree:
    """Registry of reference frames linked by parent name."""

    def __init__(self) -> None:
        self._frames: dict[str, ReferenceFrame] = {}
        self._order: list[str] | None = None

    def add(self, frame: ReferenceFrame) -> None:
        """Register a frame.

        Raises:
            FrameTreeError: If a frame with the same name is already registered.
        """
        if frame.name in self._frames:
            raise FrameTreeError(f"Frame {frame.name!r} is already registered")
        self._frames[frame.name] = frame
        self._order = None
        logger.debug("Registered frame %s (parent %s)", frame.name, frame.parent_name)

    def remove(self, name: str) -> ReferenceFrame:
        """Unregister and return a frame that has no children.

        Raises:
            FrameTreeError: If the frame is unknown or still has children.
        """
        frame = self.get(name)
        children = [f.name for f in self._frames.values() if f.parent_name == name]
        if children:
            raise FrameTreeError(f"Frame {name!r} still has children: {', '.join(children)}")
        del self._frames[name]
        self._order = None
        logger.debug("Removed frame %s", name)
        return frame

    def get(self, name: str) -> ReferenceFrame:
        """Return the frame registered under *name*.

        Raises:
            FrameTreeError: If no such frame is registered.
        """
        try:
            return self._frames[name]
        except KeyError:
            raise FrameTreeError(f"Unknown frame {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._frames

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[ReferenceFrame]:
        return iter(self._frames.values())

    def parent_of(self, name: str) -> ReferenceFrame | None:
        """Parent frame of *name*, or ``None`` for a root.

        Raises:
            FrameTreeError: If *name* or its named parent is not registered.
        """
        parent_name = self.get(name).parent_name
        if parent_name is None:
            return None
        if parent_name not in self._frames:
            raise FrameTreeError(f"Parent {parent_name!r} of frame {name!r} is not registered")
        return self._frames[parent_name]

    def children_of(self, name: str) -> list[ReferenceFrame]:
        """Frames whose parent is *name*, in registration order."""
        self.get(name)
        return [f for f in self._frames.values() if f.parent_name == name]

    def roots(self) -> list[ReferenceFrame]:
        """Frames without a parent, in registration order."""
        return [f for f in self._frames.values() if f.parent_name is None]

    def path_to_root(self, name: str) -> list[ReferenceFrame]:
        """Frames from *name* up to and including its root.

        Raises:
            FrameTreeError: On an unknown frame, a missing parent or a cycle.
        """
        path = [self.get(name)]
        seen = {name}
        parent = self.parent_of(name)
        while parent is not None:
            if parent.name in seen:
                raise FrameTreeError(f"Cycle in frame tree through {parent.name!r}")
            seen.add(parent.name)
            path.append(parent)
            parent = self.parent_of(parent.name)
        return path

    def update_order(self) -> list[str]:
        """Frame names ordered so that every parent precedes its children.

        Siblings keep their registration order.

        Raises:
            FrameTreeError: On a missing parent or a cycle.
        """
        if self._order is not None:
            return list(self._order)

        for frame in self._frames.values():
            if frame.parent_name is not None and frame.parent_name not in self._frames:
                raise FrameTreeError(
                    f"Parent {frame.parent_name!r} of frame {frame.name!r} is not registered"
                )

        order: list[str] = []
        placed: set[str] = set()
        pending = list(self._frames.values())
        while pending:
            remaining = []
            for frame in pending:
                if frame.parent_name is None or frame.parent_name in placed:
                    order.append(frame.name)
                    placed.add(frame.name)
                else:
                    remaining.append(frame)
            if len(remaining) == len(pending):
                names = ", ".join(sorted(f.name for f in remaining))
                raise FrameTreeError(f"Cycle in frame tree among: {names}")
            pending = remaining

        self._order = order
        logger.debug("Frame update order: %s", " -> ".join(order))
        return list(order)

    def state_in_ancestor(self, name: str, ancestor: str) -> ReferenceFrame:
        """State of *name* expressed relative to one of its ancestors.

        Args:
            name (str): Frame of interest.
            ancestor (str): Any frame on the path from *name* to its root,
                or *name* itself (giving the identity state).

        Returns:
            ReferenceFrame: New frame named *name* whose parent is *ancestor*.

        Raises:
            FrameTreeError: If *ancestor* is not an ancestor of *name*.
        """
        path = self.path_to_root(name)
        names = [f.name for f in path]
        if ancestor not in names:
            raise FrameTreeError(f"Frame {ancestor!r} is not an ancestor of {name!r}")

        if ancestor == name:
            state = ReferenceFrame(name, ancestor)
            state.time = path[0].time
            return state

        state = path[0].copy()
        for frame in path[1:names.index(ancestor)]:
            state = compose_states(frame, state)
        return state

    def state_relative_to(self, name: str, other: str) -> ReferenceFrame:
        """State of *name* relative to *other*, through their nearest common ancestor.

        Raises:
            FrameTreeError: If the two frames do not share a root.
        """
        other_names = {f.name for f in self.path_to_root(other)}
        common = next((f.name for f in self.path_to_root(name) if f.name in other_names), None)
        if common is None:
            raise FrameTreeError(f"Frames {name!r} and {other!r} have no common ancestor")

        return relative_state(self.state_in_ancestor(name, common), self.state_in_ancestor(other, common))
