"""
Tests for the web app manifest endpoint.
"""

from xman.manifest import build_manifest


def test_manifest_response(client):
    response = client.get("/resources/manifest.json")
    assert response.status_code == 200
    assert response.mimetype == "application/manifest+json"
    assert response.headers["Cache-Control"] == "public, max-age=600"

    payload = response.get_json(force=True)
    assert payload["short_name"] == "X Man"
    assert payload["start_url"] == "/"
    assert payload["display"] == "standalone"
    assert payload["theme_color"] == "#6A44FF"


def test_manifest_does_not_require_login(client):
    assert client.get("/resources/manifest.json").status_code == 200


def test_icons():
    manifest = build_manifest()
    assert [icon["sizes"] for icon in manifest["icons"]] == [
        "48x48",
        "72x72",
        "96x96",
        "144x144",
        "192x192",
    ]
    assert manifest["icons"][-1] == {
        "src": "/icons/android-icon-192x192.png",
        "sizes": "192x192",
        "type": "image/png",
        "density": "4.0",
    }
    shortcut = manifest["shortcuts"][0]
    assert shortcut["name"] == "Homepage"
    assert shortcut["icons"][0]["purpose"] == "any monochrome"
    assert "density" not in shortcut["icons"][0]
