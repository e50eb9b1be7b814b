"""Web app manifest served at /resources/manifest.json."""

from __future__ import annotations

from typing import Dict, List

MANIFEST_CACHE_SECONDS = 600
MANIFEST_MIMETYPE = "application/manifest+json"

# (size, density)
ANDROID_ICONS = (
    (48, "1.0"),
    (72, "1.5"),
    (96, "2.0"),
    (144, "3.0"),
    (192, "4.0"),
)


def _icon(size: int) -> Dict[str, str]:
    return {
        "src": f"/icons/android-icon-{size}x{size}.png",
        "sizes": f"{size}x{size}",
        "type": "image/png",
    }


def build_manifest() -> Dict:
    icons: List[Dict[str, str]] = []
    for size, density in ANDROID_ICONS:
        icon = _icon(size)
        icon["density"] = density
        icons.append(icon)

    shortcut_icon = _icon(96)
    shortcut_icon["purpose"] = "any monochrome"
    return {
        "short_name": "X Man",
        "name": "X Man",
        "start_url": "/",
        "display": "standalone",
        "background_color": "#d3d7dd",
        "theme_color": "#6A44FF",
        "shortcuts": [
            {"name": "Homepage", "url": "/", "icons": [shortcut_icon]},
        ],
        "icons": icons,
    }


def manifest_headers() -> Dict[str, str]:
    return {"Cache-Control": f"public, max-age={MANIFEST_CACHE_SECONDS}"}
