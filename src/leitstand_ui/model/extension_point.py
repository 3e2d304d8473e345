"""Extension points: where a contribution hooks into a module."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ExtensionPoint(BaseModel):
    """
    Positional constraint of a contribution.

    ``module`` names the target module. Without ``menu`` the extension adds
    whole menus to the module, with ``menu`` it adds items to that menu.
    ``after``/``before`` name the sibling the contributed entry must follow or
    precede. A point without either reference does not affect ordering.

    Example in a contribution file:
        extend:
          module: inventory
          menu: element
          after: element-settings
    """

    model_config = ConfigDict(frozen=True)

    module: str
    menu: Optional[str] = None
    after: Optional[str] = None
    before: Optional[str] = None

    def is_module_extension(self) -> bool:
        return self.menu is None

    def is_module_menu_extension(self) -> bool:
        return self.menu is not None
