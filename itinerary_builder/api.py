"""FastAPI application exposing the itinerary builder helpers."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import configure_logging, get_settings
from .documents import build_itinerary_document
from .images import compress_image_async
from .itinerary import new_itinerary
from .models import Branding, CostInputs, Itinerary, NightBreakup, to_dict
from .pricing import reconcile_pricing


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="Itinerary Builder", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


Count = Union[int, float, str, None]


class NightBreakupPayload(BaseModel):
    destination: str
    nights: int = 0


class CostInputsPayload(BaseModel):
    """Costing form fields as typed by the agent; blanks and junk count as 0."""

    adults: Count = 0
    children: Count = 0
    rooms: Count = 0
    extra_beds: Count = 0
    cnb_count: Count = 0
    per_adult_price: Any = ""
    per_child_price: Any = ""
    extra_bed_price: Any = ""
    cnb_price: Any = ""
    total_pax: Count = 0
    total_cost: Any = "Price on Request"
    night_breakup: List[NightBreakupPayload] = Field(default_factory=list)

    def to_cost_inputs(self) -> CostInputs:
        data = self.model_dump(exclude={"night_breakup"})
        breakup = [NightBreakup(**item.model_dump()) for item in self.night_breakup]
        return CostInputs(night_breakup=breakup, **data)


class CompressPayload(BaseModel):
    image: str = Field(..., description="Base64 data URL of the uploaded image")
    max_width: Optional[int] = Field(None, gt=0)
    max_height: Optional[int] = Field(None, gt=0)
    target_bytes: Optional[int] = Field(None, gt=0)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/pricing/reconcile")
def reconcile(payload: CostInputsPayload) -> Dict[str, Any]:
    pricing = payload.to_cost_inputs()
    changed = reconcile_pricing(pricing)
    return {"pricing": to_dict(pricing), "changed": changed}


@app.post("/images/compress")
async def compress(payload: CompressPayload) -> Dict[str, Any]:
    try:
        result = await compress_image_async(
            payload.image, payload.max_width, payload.max_height, payload.target_bytes
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "image": result.to_data_url(),
        "width": result.width,
        "height": result.height,
        "quality": result.quality,
        "size_bytes": result.size_bytes,
    }


@app.post("/itineraries/new")
def create_itinerary(branding: Optional[Branding] = None) -> Dict[str, Any]:
    return to_dict(new_itinerary(branding))


@app.post("/itineraries/document")
def create_document(itinerary: Itinerary, branding: Branding) -> Dict[str, Any]:
    if not itinerary.days:
        raise HTTPException(status_code=400, detail="At least one day is required.")
    return to_dict(build_itinerary_document(itinerary, branding))
