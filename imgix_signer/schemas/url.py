from typing import Dict, Optional, Union

from pydantic import BaseModel, Field

# Scalar types accepted as imgix parameter values
ParamValue = Union[bool, int, float, str]


class SignedURLRequest(BaseModel):
    """Request model for the signed URL endpoint."""
    path: str = Field(
        ...,
        description="URL path to the image on the imgix source",
        min_length=1
    )
    params: Optional[Dict[str, ParamValue]] = Field(
        default=None,
        description="imgix API parameters used to manipulate the image"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "path": "/images/jets.png",
                "params": {"w": 400, "h": 300}
            }
        }
    }


class ProxyURLRequest(BaseModel):
    """Request model for the signed proxy URL endpoint."""
    url: str = Field(
        ...,
        description="Full public image URL to proxy through imgix",
        min_length=1
    )
    params: Optional[Dict[str, ParamValue]] = Field(
        default=None,
        description="imgix API parameters used to manipulate the image"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "http://avatars.com/john-smith.png",
                "params": {"w": 400, "h": 300}
            }
        }
    }


class SignedURLResponse(BaseModel):
    """Response model for the signed URL endpoints."""
    url: str = Field(
        ...,
        description="Signed imgix URL"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://my-social-network.imgix.net/images/jets.png?h%3D300%26w%3D400%26s=6120405074caefb05cfcbe3cd8a2e0a0"
            }
        }
    }
