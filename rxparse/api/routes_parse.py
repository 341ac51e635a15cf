# rxparse/api/routes_parse.py
from fastapi import APIRouter

from rxparse.schemas.models import ParseRequest, ParseResponse
from rxparse.services.parsing import parse_prescription

router = APIRouter(tags=["parse"])

@router.post("/parse-prescription", response_model=ParseResponse)
def parse_prescription_route(req: ParseRequest):
    # blank input is a normal "no parse" outcome, not an HTTP error
    return parse_prescription(
        req.input,
        use_ai=req.use_ai,
        api_key=req.api_key,
        timeout_s=req.timeout_s,
    )
