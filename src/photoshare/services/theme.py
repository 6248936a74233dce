"""Light/dark theme preference."""

from dataclasses import dataclass, field

from photoshare.domain.session import Theme
from photoshare.services.client_storage import ClientStorage

THEME_KEY = "photoshare_theme"
DARK_CLASS = "dark"


@dataclass
class ThemeState:
    """Theme preference with an OS-preference fallback.

    ``root_classes`` mirrors the applied theme as CSS classes for the
    document root.
    """

    storage: ClientStorage
    prefers_dark: bool = False
    root_classes: set[str] = field(default_factory=set)

    def get_theme(self) -> Theme:
        """Return the stored theme, else the OS preference, else light."""
        saved = self.storage.get(THEME_KEY)
        if saved:
            try:
                return Theme(saved)
            except ValueError:
                pass
        return Theme.DARK if self.prefers_dark else Theme.LIGHT

    def set_theme(self, theme: Theme) -> None:
        """Persist a theme and apply it to the root classes."""
        self.storage.set(THEME_KEY, theme.value)
        self._apply(theme)

    def toggle_theme(self) -> Theme:
        """Flip between light and dark and return the new theme."""
        new_theme = Theme.LIGHT if self.get_theme() is Theme.DARK else Theme.DARK
        self.set_theme(new_theme)
        return new_theme

    def init_theme(self) -> Theme:
        """Normalise storage and root classes with the current theme."""
        current = self.get_theme()
        self.set_theme(current)
        return current

    def apply_theme(self) -> Theme:
        """Sync the root classes with the current theme without persisting it."""
        current = self.get_theme()
        self._apply(current)
        return current

    def is_dark(self) -> bool:
        return self.get_theme() is Theme.DARK

    def _apply(self, theme: Theme) -> None:
        if theme is Theme.DARK:
            self.root_classes.add(DARK_CLASS)
        else:
            self.root_classes.discard(DARK_CLASS)
