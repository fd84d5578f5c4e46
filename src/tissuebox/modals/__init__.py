"""Modal dialogs for the tissuebox TUI.

Import modals from this package: ``from tissuebox.modals import ConfirmModal``
"""

from tissuebox.modals.common import ConfirmModal

__all__ = ["ConfirmModal"]
