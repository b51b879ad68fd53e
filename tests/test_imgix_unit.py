#!/usr/bin/env python3
"""
Unit Tests for imgix URL signing
Tests the signer, the URL builders and the configured-source service
"""

import hashlib
import pytest
import sys
import os
from urllib.parse import parse_qsl, unquote

# Add the app directory to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from imgix_signer.core.config import ImgixSource
from imgix_signer.core.errors import ConfigurationMissingError, InvalidInputError
from imgix_signer.services.imgix import ImgixService, build_proxy_url, build_url, sign
from imgix_signer.utils.query import encode_unreserved

DOMAIN = "https://my-social-network.imgix.net"
AVATAR = "http://avatars.com/john-smith.png"
ENCODED_AVATAR = "/http%3A%2F%2Favatars.com%2Fjohn-smith.png"


class TestSign:
    """Test cases for the signature."""

    def test_known_digest(self):
        assert sign("aaBBcc", "/images/jets.png") == "f57da971ac95af0f16670e1b0b0e4365"
        assert sign("xxx187xxx", "/images/jets.png?con=10") == "d982f04bbca4d819971496524aa5f95a"

    def test_matches_md5_of_token_and_path(self):
        expected = hashlib.md5(b"secret/a/b.jpg?w=1").hexdigest()
        assert sign("secret", "/a/b.jpg?w=1") == expected

    def test_lowercase_hex(self):
        signature = sign("aaBBcc", "/images/jets.png")
        assert len(signature) == 32
        assert signature == signature.lower()
        int(signature, 16)


class TestBuildUrl:
    """Test cases for signed URLs on the source's own domain."""

    def test_without_params(self, source):
        assert build_url("/images/jets.png", None, source) == (
            f"{DOMAIN}/images/jets.png?s=f57da971ac95af0f16670e1b0b0e4365"
        )

    def test_without_params_property(self):
        for token, path in [("t", "/a.png"), ("abc123", "/dir/with space.jpg"), ("", "/x")]:
            source = ImgixSource(token=token, domain="https://d.imgix.net")
            expected_sig = hashlib.md5((token + path).encode("utf-8")).hexdigest()
            assert build_url(path, None, source) == f"https://d.imgix.net{path}?s={expected_sig}"

    def test_with_params(self, source):
        assert build_url("/images/jets.png", {"con": 10}, source) == (
            f"{DOMAIN}/images/jets.png?con%3D10%26s=4964d289be1d3eba495ab25d03d5c2a3"
        )

    def test_with_params_other_source(self):
        source = ImgixSource(token="xxx187xxx", domain="https://cannonball.imgix.net")
        assert build_url("/images/jets.png", {"con": 10}, source) == (
            "https://cannonball.imgix.net/images/jets.png?con%3D10%26s=d982f04bbca4d819971496524aa5f95a"
        )

    def test_multiple_params_sorted(self, source):
        assert build_url("/images/jets.png", {"w": 400, "h": 300}, source) == (
            f"{DOMAIN}/images/jets.png?h%3D300%26w%3D400%26s=6120405074caefb05cfcbe3cd8a2e0a0"
        )

    def test_params_needing_escapes(self, source):
        url = build_url("/images/jets.png", {"txtclr": "#fff", "txt": "hello world"}, source)
        assert url == (
            f"{DOMAIN}/images/jets.png?txt%3Dhello%2Bworld%26txtclr%3D%2523fff"
            "%26s=a2c55559884f2ed7a288388334a548fe"
        )

    def test_boolean_params(self, source):
        url = build_url("/images/jets.png", {"lossless": True, "fm": "png"}, source)
        assert url.endswith("%26s=4b9121b9a6dcb445a8b1662699413476")

    def test_empty_params_treated_as_absent(self, source):
        assert build_url("/images/jets.png", {}, source) == build_url("/images/jets.png", None, source)

    def test_query_round_trips(self, source):
        params = {"w": 400, "txt": "Tom & Jerry", "mark-align": "top,left"}
        url = build_url("/images/jets.png", params, source)

        query = url.split("?", 1)[1].rsplit("%26s=", 1)[0]
        decoded = dict(parse_qsl(unquote(query)))
        assert decoded == {key: str(value) for key, value in params.items()}

    def test_deterministic(self, source):
        params = {"w": 400, "h": 300, "fit": "crop"}
        assert build_url("/a.png", params, source) == build_url("/a.png", dict(params), source)

    def test_changing_a_value_changes_signature(self, source):
        first = build_url("/images/jets.png", {"con": 10}, source)
        second = build_url("/images/jets.png", {"con": 11}, source)
        assert first.rsplit("=", 1)[1] != second.rsplit("=", 1)[1]
        assert second.endswith("%26s=7938ea6c7fdb60032d4b51f777bf178d")

    def test_key_order_does_not_change_url(self, source):
        assert build_url("/a.png", {"w": 1, "h": 2}, source) == build_url("/a.png", {"h": 2, "w": 1}, source)

    def test_invalid_path(self, source):
        with pytest.raises(InvalidInputError) as exc_info:
            build_url(None, None, source)
        assert exc_info.value.context["field"] == "path"

    def test_invalid_param_value(self, source):
        with pytest.raises(InvalidInputError):
            build_url("/images/jets.png", {"w": [400]}, source)


class TestBuildProxyUrl:
    """Test cases for Web Proxy source URLs."""

    def test_without_params(self, source):
        assert build_proxy_url(AVATAR, None, source) == (
            f"{DOMAIN}{ENCODED_AVATAR}?s=a45acdbc5abb99d8947b662d6851a1fa"
        )

    def test_with_params(self, source):
        assert build_proxy_url(AVATAR, {"w": 400, "h": 300}, source) == (
            f"{DOMAIN}{ENCODED_AVATAR}?h%3D300%26w%3D400%26s=eb5b748cb700a574d1dbd3a046979b33"
        )

    def test_delegates_to_build_url(self, source):
        url = "https://example.com/photos/a b.jpg?size=large&v=2"
        params = {"w": 100}
        assert build_proxy_url(url, params, source) == build_url("/" + encode_unreserved(url), params, source)

    def test_invalid_url(self, source):
        with pytest.raises(InvalidInputError):
            build_proxy_url(42, None, source)


class TestImgixService:
    """Test cases for the service using the configured source."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ImgixService()

    def test_url_uses_configured_source(self, configured):
        assert self.service.url("/images/jets.png") == build_url("/images/jets.png", None, configured)

    def test_proxy_url_uses_configured_source(self, configured):
        assert self.service.proxy_url(AVATAR, {"w": 400, "h": 300}) == (
            build_proxy_url(AVATAR, {"w": 400, "h": 300}, configured)
        )

    def test_explicit_source_wins(self, configured):
        other = ImgixSource(token="xxx187xxx", domain="https://cannonball.imgix.net")
        assert self.service.url("/images/jets.png", {"con": 10}, other) == (
            "https://cannonball.imgix.net/images/jets.png?con%3D10%26s=d982f04bbca4d819971496524aa5f95a"
        )

    def test_explicit_source_without_configuration(self, unconfigured, source):
        assert self.service.url("/images/jets.png", None, source).startswith(DOMAIN)

    def test_missing_configuration(self, unconfigured):
        with pytest.raises(ConfigurationMissingError):
            self.service.url("/images/jets.png")
        with pytest.raises(ConfigurationMissingError):
            self.service.proxy_url(AVATAR)
