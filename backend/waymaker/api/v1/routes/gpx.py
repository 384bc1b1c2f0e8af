"""
GPX File Routes

Endpoints for importing and exporting GPX files.
"""

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from waymaker.config import settings
from waymaker.features.gpx import GPXExporterService, GPXParserService
from waymaker.features.gpx.schemas import (
    GPXExportRequest,
    GPXImportResponse,
    GPXMetadataSchema,
    GPXTrackSchema,
)
from waymaker.features.routing.schemas import CoordinatesSchema
from waymaker.shared.exceptions import GPXParseError

router = APIRouter()


@router.post("/import", response_model=GPXImportResponse)
async def import_gpx(file: UploadFile = File(...)):
    """
    Upload and parse a GPX file.

    Returns everything found in the file plus the waypoints selected for
    planning (first route, else first track simplified, else waypoints).
    """
    # Validate file
    if not file.filename or not file.filename.lower().endswith('.gpx'):
        raise HTTPException(status_code=400, detail="Only .gpx files are allowed")

    # Read content
    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    max_bytes = settings.gpx_max_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {settings.gpx_max_upload_mb}MB)"
        )

    # Parse GPX
    try:
        result = GPXParserService.parse(content)
    except GPXParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    selected = GPXParserService.to_waypoints(result)

    return GPXImportResponse(
        filename=file.filename,
        tracks=[GPXTrackSchema.model_validate(t) for t in result.tracks],
        routes=[GPXTrackSchema.model_validate(r) for r in result.routes],
        waypoints=[CoordinatesSchema.model_validate(w) for w in result.waypoints],
        metadata=(
            GPXMetadataSchema.model_validate(result.metadata) if result.metadata else None
        ),
        selected_waypoints=[CoordinatesSchema.model_validate(w) for w in selected],
    )


@router.post("/export")
async def export_gpx(request: GPXExportRequest):
    """Export a planned route as a GPX 1.1 download."""
    route = request.route.to_domain()
    content = GPXExporterService.export(
        route,
        request.options.to_domain(),
        refuges=[r.to_domain() for r in request.refuges],
        water_points=[w.to_domain() for w in request.water_points],
    )

    filename = f"{route.id}.gpx"
    return Response(
        content=content,
        media_type="application/gpx+xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
