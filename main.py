# main.py

import os

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from lunatex.app_logic import convert_source
from lunatex.config import load_note_style
from lunatex.errors import ConfigError, ConversionError
from lunatex.latex_converter import latex_to_device_text
from lunatex.schemas import RenderTextRequest, RenderTextResponse

app = FastAPI(
    title="lunatex API",
    description="Converts Lua, Python and LaTeX-flavoured text into TI-Nspire .tns documents",
    version="1.0.0",
)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    """
    Health check.

    Returns:
        dict: A fixed status message.
    """
    return {"message": "lunatex API is running."}


@app.post("/render-text", response_model=RenderTextResponse)
def render_text_endpoint(request: RenderTextRequest):
    """
    Previews how a piece of LaTeX markup will read on the handheld.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text cannot be empty.")
    return RenderTextResponse(text=latex_to_device_text(request.text))


@app.post("/convert")
async def convert_endpoint(file: UploadFile = File(...)):
    """
    Receives a .lua, .py or .txt upload and returns the matching .tns document.

    Raises:
        HTTPException: 400 for an unsupported file type or content that cannot be converted,
            500 if the note style configured on the server is invalid.
    """
    filename = os.path.basename(file.filename or "")
    data = await file.read()

    try:
        style = load_note_style()
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))

    try:
        tns_bytes, log = await run_in_threadpool(convert_source, filename, data, style=style, logger=print)
    except ConversionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stem = os.path.splitext(filename)[0] or "document"
    return Response(
        content=tns_bytes,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{stem}.tns"'},
    )
