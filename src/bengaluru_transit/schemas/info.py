"""Contracts for the general information endpoints."""

from pydantic import BaseModel, Field

from .common import Envelope, FiniteFloat


class HelplineItem(BaseModel):
    labelname: str
    busstopname: str | None
    helplinenumber: str


class HelplineResponse(Envelope):
    data: list[HelplineItem]


class ServiceTypeItem(BaseModel):
    servicetype: str
    servicetypeid: int


class ServiceTypesResponse(Envelope):
    data: list[ServiceTypeItem]


class AboutItem(BaseModel):
    termsandconditionsurl: str
    aboutbmtcurl: str
    aboutdeveloperurl: str
    # upstream spelling
    airportlattitude: FiniteFloat
    airportlongitude: FiniteFloat
    airportstationid: int
    airportstationname: str


class AboutResponse(Envelope):
    data: list[AboutItem] = Field(min_length=1)
