"""Control a Pyramid RGB(W) indicator light over its serial protocol."""

from .controller import RGBController
from .models.color import Color, RgbwValue
