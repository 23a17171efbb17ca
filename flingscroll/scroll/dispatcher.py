"""Immediate displacement of resolved scroll targets."""

from __future__ import annotations

import logging

from flingscroll.api.host import NON_SMOOTH_BEHAVIOR, ScrollDocument
from flingscroll.scroll.overrides import HostOverrideTable

_LOG = logging.getLogger(__name__)


class ScrollDispatcher:
    """Apply displacements, honoring the host override table."""

    def __init__(
        self,
        document: ScrollDocument,
        *,
        overrides: HostOverrideTable | None = None,
    ) -> None:
        self._document = document
        self._overrides = overrides if overrides is not None else HostOverrideTable()

    @property
    def overrides(self) -> HostOverrideTable:
        return self._overrides

    def effective_target(self, target: object) -> object:
        override = self._overrides.for_host(self._document.host_name)
        if override is None:
            return target
        redirected = override(self._document, target)
        return target if redirected is None else redirected

    def apply(self, target: object, dx: float, dy: float) -> bool:
        """Scroll target by (dx, dy) without host smoothing.

        Returns False when the effective target cannot scroll.
        """
        effective = self.effective_target(target)
        scroll_by = getattr(effective, "scroll_by", None)
        if scroll_by is None:
            _LOG.debug("dispatch_skipped reason=not_scrollable target=%r", effective)
            return False
        scroll_by(dx, dy, behavior=NON_SMOOTH_BEHAVIOR)
        return True
