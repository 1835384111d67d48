"""
Module with classes that define the keymap representation, with multiple layers
of raw bindings, and the compiled keyboard model that pairs the default layer
with the physical keyboard layout.
"""

from pydantic import BaseModel, Field

from zmk_layout.physical_layout import Frame, KeyPosition


class Layer(BaseModel, frozen=True):
    """Represents a keymap layer, with raw binding expressions like "&kp Q" in declaration order."""

    name: str
    display_name: str
    bindings: list[str]

    def __len__(self) -> int:
        return len(self.bindings)


class Keymap(BaseModel, frozen=True):
    """Represents a keymap as a sequence of layers. The first declared layer is the default one."""

    name: str
    layers: list[Layer]

    @property
    def default_layer(self) -> Layer | None:
        """Return the first layer in declaration order, if any."""
        return self.layers[0] if self.layers else None

    def layer(self, name: str) -> Layer | None:
        """Get layer by its name or display name."""
        return next((layer for layer in self.layers if name in (layer.name, layer.display_name)), None)


class ResolvedBinding(BaseModel, frozen=True):
    """
    Display legend for a binding, and the platform key code it emits if the binding presses
    a key with a known code. The two are looked up independently.
    """

    legend: str = ""
    key_code: int | None = None


class ComposedKey(BaseModel, frozen=True):
    """A physical key position paired with the binding assigned to it and its frame in output units."""

    position: KeyPosition
    binding: str
    resolved: ResolvedBinding
    frame: Frame

    @property
    def index(self) -> int:  # pylint: disable=missing-function-docstring
        return self.position.index

    @property
    def legend(self) -> str:  # pylint: disable=missing-function-docstring
        return self.resolved.legend

    @property
    def key_code(self) -> int | None:  # pylint: disable=missing-function-docstring
        return self.resolved.key_code

    @property
    def rotation(self) -> int:  # pylint: disable=missing-function-docstring
        return self.position.rotation


class KeyboardLayoutModel(BaseModel, frozen=True):
    """Renderable keyboard: named, ordered keys with resolved legends and the overall bounding size."""

    name: str
    display_name: str
    keymap_name: str = ""
    layer_names: list[str] = Field(default_factory=list)
    keys: list[ComposedKey]
    width: float
    height: float

    def __len__(self) -> int:
        return len(self.keys)

    def key_for_key_code(self, key_code: int) -> ComposedKey | None:
        """Find the first key that emits the given platform key code."""
        return next((key for key in self.keys if key.key_code == key_code), None)

    def key_for_index(self, index: int) -> ComposedKey | None:
        """Find key by its physical layout index."""
        return next((key for key in self.keys if key.index == index), None)
