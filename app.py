import base64
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

import config
from errors import MalformedPdfError, NothingToFillError, PacketFillError, TemplateNotFoundError
from field_map import load_field_map
from fill_values import build_fill_values, normalize_base64
from form_progress import FormProgressStore
from handbook_fill import fill_handbook_fields
from pdf_forms import form_select_options, get_form_display_name
from template_store import load_template_base64

config.configure_logging()

TEMPLATE_PATH = config.HANDBOOK_TEMPLATE_PATH
FIELD_MAP_PATH = config.HANDBOOK_FIELD_MAP
HANDBOOK_FORM = config.HANDBOOK_FORM_NAME

store = FormProgressStore(config.PROGRESS_DIR)

# --- app ---
app = FastAPI()

STATUS_BY_CODE = {
    "MALFORMED_PDF": 400,
    "INVALID_KEY": 400,
    "NOTHING_TO_FILL": 422,
    "TEMPLATE_NOT_FOUND": 404,
}


@app.exception_handler(PacketFillError)
async def packet_fill_error(request: Request, exc: PacketFillError):
    return JSONResponse(status_code=STATUS_BY_CODE.get(exc.error_code, 500), content=exc.to_dict())


class HandbookFillRequest(BaseModel):
    name: str
    primary_date: Optional[str] = None
    fallback_date: Optional[str] = None
    form_data: Optional[str] = None


class ProgressSaveRequest(BaseModel):
    form_name: str
    form_data: str


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.get("/api/forms")
def api_forms():
    return form_select_options()


@app.get("/api/handbook/template")
def handbook_template():
    encoded = load_template_base64(TEMPLATE_PATH)
    if encoded is None:
        raise HTTPException(404, "Handbook template not found")
    return Response(
        content=base64.b64decode(encoded),
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="employee-handbook.pdf"'},
    )


@app.post("/api/handbook/fill/{user_id}")
def handbook_fill(user_id: str, body: HandbookFillRequest):
    # uploaded copy first, then saved progress, then the blank template
    source = normalize_base64(body.form_data)
    if not source:
        saved = store.get(user_id, HANDBOOK_FORM)
        source = saved.form_data if saved else None
    if not source:
        source = load_template_base64(TEMPLATE_PATH)
    if not source:
        raise TemplateNotFoundError(TEMPLATE_PATH)

    values = build_fill_values(body.name, body.primary_date, body.fallback_date)
    filled = fill_handbook_fields(source, values, load_field_map(FIELD_MAP_PATH))
    if filled is None:
        raise NothingToFillError(get_form_display_name(HANDBOOK_FORM))

    record = store.save(user_id, HANDBOOK_FORM, filled)
    return record.model_dump()


@app.post("/api/form-progress/{user_id}")
def progress_save(user_id: str, body: ProgressSaveRequest):
    form_data = normalize_base64(body.form_data)
    if not form_data:
        raise MalformedPdfError("form_data is empty")
    record = store.save(user_id, body.form_name, form_data)
    return {"success": True, "form_name": record.form_name, "updated_at": record.updated_at}


@app.get("/api/form-progress/{user_id}")
def progress_list(user_id: str):
    return [
        {
            "form_name": r.form_name,
            "display_name": get_form_display_name(r.form_name),
            "updated_at": r.updated_at,
        }
        for r in store.list_forms(user_id)
    ]


@app.get("/api/form-progress/{user_id}/{form_name}")
def progress_get(user_id: str, form_name: str):
    record = store.get(user_id, form_name)
    if record is None:
        raise HTTPException(404, "Not found")
    return record.model_dump()


@app.delete("/api/form-progress/{user_id}/{form_name}")
def progress_delete(user_id: str, form_name: str):
    store.delete(user_id, form_name)
    return {"ok": True}
