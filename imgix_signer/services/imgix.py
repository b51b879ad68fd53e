import hashlib
from typing import Any, Mapping, Optional

from imgix_signer.core.config import ImgixSource, configured_source
from imgix_signer.core.errors import InvalidInputError
from imgix_signer.core.logging import get_logger
from imgix_signer.utils.query import encode_unreserved, path_with_encoded_params, path_with_params

logger = get_logger("imgix")

# Signature parameter joined onto an already-encoded query string
ENCODED_SIGNATURE_SEPARATOR = "%26s="
SIGNATURE_SEPARATOR = "?s="


def sign(token: str, path: str) -> str:
    """Sign a path and query string with the source's secure token.

    imgix verifies requests with an MD5 digest of the token followed by the
    singly-encoded path and query.

    Args:
        token: Secure token of the imgix source
        path: Path with its canonical query string, if any

    Returns:
        32 lowercase hex characters
    """
    return hashlib.md5((token + path).encode("utf-8")).hexdigest()


def build_url(path: str, params: Optional[Mapping[str, Any]], source: ImgixSource) -> str:
    """Generate a signed imgix URL for an image hosted on the source.

    Args:
        path: URL path to the image, starting with "/"
        params: imgix API parameters used to manipulate the image, or None
        source: imgix source to sign for

    Returns:
        Signed imgix URL
    """
    if not isinstance(path, str):
        raise InvalidInputError(f"expected a string, got {type(path).__name__}", field="path")

    signed_path = path_with_params(path, params)
    encoded_path = path_with_encoded_params(path, params)

    signature = sign(source.token, signed_path)

    if signed_path != path:
        return source.domain + encoded_path + ENCODED_SIGNATURE_SEPARATOR + signature
    return source.domain + path + SIGNATURE_SEPARATOR + signature


def build_proxy_url(url: str, params: Optional[Mapping[str, Any]], source: ImgixSource) -> str:
    """Generate a signed imgix URL for a Web Proxy source.

    The public image URL is escaped into a single path segment.
    """
    if not isinstance(url, str):
        raise InvalidInputError(f"expected a string, got {type(url).__name__}", field="url")

    return build_url("/" + encode_unreserved(url), params, source)


class ImgixService:
    """Service for generating signed imgix URLs."""

    def url(self, path: str, params: Optional[Mapping[str, Any]] = None,
            source: Optional[ImgixSource] = None) -> str:
        """Generate a signed imgix URL.

        Args:
            path: URL path to the image
            params: Optional imgix API parameters
            source: Optional imgix source, defaults to the configured one

        Returns:
            Signed imgix URL
        """
        if source is None:
            source = configured_source()

        signed_url = build_url(path, params, source)
        logger.debug(f"Signed imgix URL for {path} on {source.domain}")
        return signed_url

    def proxy_url(self, url: str, params: Optional[Mapping[str, Any]] = None,
                  source: Optional[ImgixSource] = None) -> str:
        """Generate a signed imgix URL that proxies a public image URL.

        Args:
            url: Full public image URL
            params: Optional imgix API parameters
            source: Optional imgix source, defaults to the configured one

        Returns:
            Signed imgix URL
        """
        if source is None:
            source = configured_source()

        signed_url = build_proxy_url(url, params, source)
        logger.debug(f"Signed imgix proxy URL for {url} on {source.domain}")
        return signed_url


# Create a singleton instance
imgix_service = ImgixService()
