"""Category colours for the volcano plot."""

from __future__ import annotations

from ..classification import Category

CATEGORY_COLORS: dict[str, str] = {
    Category.SIG_UP.value: "#3fb950",
    Category.SIG_DOWN.value: "#f85149",
    Category.NOT_SIG.value: "#484f58",
}

CATEGORY_NAMES: dict[str, str] = {
    Category.SIG_UP.value: "Up",
    Category.SIG_DOWN.value: "Down",
    Category.NOT_SIG.value: "Not significant",
}
