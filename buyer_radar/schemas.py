from datetime import date
from pydantic import BaseModel, Field

# Options offered by the search UI. Any positive radius / non-negative
# month count is accepted; these are just the presets.
RADIUS_OPTIONS_MILES = (1, 2, 3, 5, 10, 15)
MONTHS_OPTIONS = (12, 24)

class Point(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

class BuyerQuery(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    radius_miles: float = 2.0
    months: int = 12
    category: str = "all"
    segments: int = 64

class ContactOut(BaseModel):
    phone: str | None = None
    email: str | None = None

class BuyerSummaryOut(BaseModel):
    buyer_id: str
    name: str
    category: str
    contacts: list[ContactOut]
    deal_count: int = Field(ge=1)
    most_recent_deal_date: date
    median_price: float

class BuyersResponse(BaseModel):
    center: Point
    radius_miles: float
    months: int
    category: str
    since_date: date
    count: int
    buyers: list[BuyerSummaryOut]
    boundary: list[Point]
    boundary_geojson: dict
    markers: dict
    message: str | None = None
    cached: bool = False
    etag: str | None = None

class BoundaryResponse(BaseModel):
    center: Point
    radius_miles: float
    segments: int
    boundary: list[Point]
    boundary_geojson: dict

class ReloadResponse(BaseModel):
    version: int
    buyers: int
    properties: int
    events: int
