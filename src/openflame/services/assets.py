"""Static asset registry and its template-facing proxy."""

from typing import Any, Optional

from ..core.proxy import ServiceProxy


class AssetInstance:
    """A single asset: type, name, URL and free-form properties."""

    def __init__(self, name: str = "", asset_type: str = "", url: str = "", base_url: str = ""):
        self.name = str(name)
        self.type = str(asset_type)
        self.url = ""
        self.base_url = ""
        self.properties: dict[str, Any] = {}
        self.set_url(url)
        self.set_base_url(base_url)

    def set_url(self, url: str) -> "AssetInstance":
        self.url = "/" + url.lstrip("/") if url else ""
        return self

    def set_base_url(self, base_url: str) -> "AssetInstance":
        self.base_url = base_url.rstrip("/")
        return self

    def get_property(self, prop: str) -> Any:
        return self.properties.get(str(prop))

    def set_property(self, prop: str, value: Any) -> "AssetInstance":
        self.properties[str(prop)] = value
        return self

    def __str__(self) -> str:
        return self.base_url + self.url


class AssetManager:
    """Registers assets by type and name and stamps them with a base URL."""

    def __init__(self):
        self.base_url = ""
        self._assets: dict[str, dict[str, AssetInstance]] = {}

    def set_base_url(self, base_url: str) -> "AssetManager":
        self.base_url = base_url.rstrip("/")
        for group in self._assets.values():
            for asset in group.values():
                asset.set_base_url(self.base_url)
        return self

    def register_asset(self, asset_type: str, name: str, url: str) -> AssetInstance:
        asset = AssetInstance(name, asset_type, url, self.base_url)
        self._assets.setdefault(asset_type, {})[name] = asset
        return asset

    def get_asset(self, asset_type: str, name: str) -> Optional[AssetInstance]:
        return self._assets.get(asset_type, {}).get(name)

    def get_assets(self, asset_type: str) -> dict[str, AssetInstance]:
        return dict(self._assets.get(asset_type, {}))


class AssetProxy(ServiceProxy):
    """Template facade over the "asset" service.

    ``proxy["css"]["main"]`` reads as a nested lookup in templates.
    """

    target_name = "asset"

    def __getitem__(self, asset_type: str) -> dict[str, AssetInstance]:
        return self.resolve_target().get_assets(asset_type)
