"""Interactive command shells built from nested menus, with history, completion and schedulers."""

__version__ = "0.1.0"