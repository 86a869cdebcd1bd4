"""Operator HTTP API for injecting accidents and tuning entropy."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, FastAPI, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field

from .entities import Accident, AccidentType, Entropy
from .generator import Tabajara

logger = logging.getLogger(__name__)


# ============================================================================
# Models
# ============================================================================

class AccidentBody(BaseModel):
    """Accident as exchanged with operators"""
    model_config = ConfigDict(populate_by_name=True)

    type: AccidentType
    resource_name: str = Field(alias="resourceName", min_length=1)
    value: float = Field(allow_inf_nan=False)

    @classmethod
    def from_accident(cls, accident: Accident) -> "AccidentBody":
        return cls(type=accident.type, resource_name=accident.resource_name, value=accident.value)

    def to_accident(self) -> Accident:
        return Accident(type=self.type, resource_name=self.resource_name, value=self.value)


class EntropyBody(BaseModel):
    """Label cardinality per dimension"""
    model_config = ConfigDict(populate_by_name=True)

    uri_count: int = Field(1, alias="uriCount", ge=0)
    service_version_count: int = Field(1, alias="serviceVersionCount", ge=0)
    app_version_count: int = Field(1, alias="appVersionCount", ge=0)
    device_count: int = Field(1, alias="deviceCount", ge=0)

    @classmethod
    def from_entropy(cls, entropy: Entropy) -> "EntropyBody":
        return cls(
            uri_count=entropy.uri_count,
            service_version_count=entropy.service_version_count,
            app_version_count=entropy.app_version_count,
            device_count=entropy.device_count,
        )

    def to_entropy(self) -> Entropy:
        return Entropy(
            uri_count=self.uri_count,
            service_version_count=self.service_version_count,
            app_version_count=self.app_version_count,
            device_count=self.device_count,
        )


# ============================================================================
# Routes
# ============================================================================

def build_router(generator: Tabajara) -> APIRouter:
    router = APIRouter()

    @router.get("/accidents", response_model=List[AccidentBody], response_model_by_alias=True)
    def list_accidents():
        return [AccidentBody.from_accident(accident) for accident in generator.list_accidents()]

    @router.post(
        "/accidents",
        response_model=AccidentBody,
        response_model_by_alias=True,
        status_code=status.HTTP_201_CREATED,
    )
    def create_accident(body: AccidentBody):
        generator.create_accident(body.to_accident())
        return body

    @router.delete("/accidents/{accident_type}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_accident(
        accident_type: AccidentType,
        resource_name: str = Query(..., alias="resourceName"),
    ):
        generator.delete_accident(accident_type, resource_name)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/accidents", status_code=status.HTTP_204_NO_CONTENT)
    def delete_accidents():
        generator.delete_accidents()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/entropy", response_model=EntropyBody, response_model_by_alias=True)
    def get_entropy():
        return EntropyBody.from_entropy(generator.get_entropy())

    @router.put("/entropy", response_model=EntropyBody, response_model_by_alias=True)
    def set_entropy(body: EntropyBody):
        generator.set_entropy(body.to_entropy())
        return body

    @router.get("/healthz")
    def healthz():
        return {"status": "ok", "ticks": generator.ticks}

    return router


def create_app(generator: Tabajara) -> FastAPI:
    app = FastAPI(title="tabajara-metrics", description="Synthetic HTTP metrics generator")
    app.include_router(build_router(generator))
    return app


__all__ = ["AccidentBody", "EntropyBody", "create_app"]
