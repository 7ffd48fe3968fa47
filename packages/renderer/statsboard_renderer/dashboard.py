"""Dashboard image composer for the 800x600 stats card."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from statsboard_telemetry.models import MetricsSnapshot

from .errors import RenderError
from .formatting import build_stats_text
from .models import DashboardImage, ThemeConfig
from .themes import get_theme


TITLE = "Server Stats"
# Baseline-left positions of the first line.
TITLE_XY = (20, 40)
BODY_XY = (20, 80)
FONT_SIZE = 20


class DashboardRenderer:
    """Draws the stats text block and encodes it as PNG."""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        theme_name: str | None = None,
        image_name: str = "stats.png",
    ) -> None:
        self.width = width
        self.height = height
        self.theme_name = theme_name
        self.image_name = image_name

    def render(self, snapshot: MetricsSnapshot) -> DashboardImage:
        try:
            image = self.render_image(snapshot)
            buf = BytesIO()
            image.save(buf, format="PNG")
        except Exception as exc:
            raise RenderError(f"dashboard render failed: {exc}") from exc
        return DashboardImage(name=self.image_name, data=buf.getvalue())

    def render_image(self, snapshot: MetricsSnapshot) -> Image.Image:
        theme = get_theme(self.theme_name)
        image = Image.new("RGB", (self.width, self.height), _rgb(theme.background))
        draw = ImageDraw.Draw(image)

        self._draw_title(draw, theme)
        self._draw_body(draw, theme, snapshot)
        return image

    def _font(self, size: int):
        for name in ("DejaVuSansMono.ttf", "DejaVuSans.ttf", "Arial.ttf"):
            try:
                return ImageFont.truetype(name, size)
            except OSError:
                continue
        return ImageFont.load_default(size)

    def _draw_title(self, draw: ImageDraw.ImageDraw, theme: ThemeConfig) -> None:
        font = self._font(FONT_SIZE)
        xy, anchor = _place(TITLE_XY, font)
        draw.text(xy, TITLE, font=font, fill=_rgb(theme.title), anchor=anchor)

    def _draw_body(self, draw: ImageDraw.ImageDraw, theme: ThemeConfig, s: MetricsSnapshot) -> None:
        font = self._font(FONT_SIZE)
        xy, anchor = _place(BODY_XY, font)
        draw.multiline_text(
            xy,
            build_stats_text(s),
            font=font,
            fill=_rgb(theme.text_primary),
            spacing=4,
            anchor=anchor,
        )


def _place(xy: tuple[int, int], font) -> tuple[tuple[int, int], str | None]:
    if isinstance(font, ImageFont.FreeTypeFont):
        return xy, "ls"
    # Bitmap fonts only draw from the top-left corner.
    return (xy[0], xy[1] - FONT_SIZE), None


def _rgb(color: str) -> tuple[int, int, int]:
    return tuple(int(color[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]
