"""Sources — asset, file, network and raw markup strategies."""

from svgprovider.sources.assets import AssetBundle, DirectoryAssetBundle, PackageAssetBundle
from svgprovider.sources.files import LocalFileReader
from svgprovider.sources.http import HttpSvgClient
from svgprovider.sources.resolver import SourceResolver

__all__ = [
    "AssetBundle",
    "DirectoryAssetBundle",
    "PackageAssetBundle",
    "HttpSvgClient",
    "LocalFileReader",
    "SourceResolver",
]
