"""
FastAPI server for the gearbox selector.

Provides REST API endpoints and a simple HTML UI.
"""

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from gearsel import __version__
from gearsel.catalog.datasets import Catalog
from gearsel.catalog.drawings import find_drawings
from gearsel.catalog.loader import CatalogLoadError, default_catalog
from gearsel.models.catalog import Motor, Reducer
from gearsel.models.selection import (
    CandidateRequest,
    DrawingFiles,
    LoadType,
    SelectionReport,
    SelectionResult,
    SelectRequest,
)
from gearsel.scoring.suitability import LOAD_FACTORS, LOAD_TYPE_DESCRIPTIONS
from gearsel.selector.candidates import GearboxSelector, filter_motors

# Create FastAPI app
app = FastAPI(
    title="Gearbox Selector API",
    description="""
    Match servo motors with planetary gearboxes.

    Checks shaft compatibility, computes output speed, torque and service
    factor, and resolves the bushing, adapter and drawings for a selection.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# HTML UI Template
HTML_UI = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Gearbox Selector</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
            color: #333;
        }
        h1 { color: #2c3e50; border-bottom: 3px solid #3498db; padding-bottom: 10px; }
        .container { display: flex; gap: 20px; flex-wrap: wrap; }
        .input-section, .output-section {
            flex: 1;
            min-width: 360px;
            background: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        textarea {
            width: 100%;
            height: 240px;
            font-family: 'Monaco', 'Menlo', monospace;
            font-size: 12px;
            padding: 10px;
            border: 1px solid #ddd;
            border-radius: 4px;
        }
        button {
            margin-top: 15px;
            padding: 12px 24px;
            font-size: 14px;
            cursor: pointer;
            border: none;
            border-radius: 4px;
            background: #3498db;
            color: white;
        }
        .card {
            border: 1px solid #ddd;
            border-radius: 8px;
            padding: 12px;
            margin-bottom: 10px;
        }
        .suitable { border-left: 6px solid #27ae60; }
        .caution { border-left: 6px solid #f39c12; }
        .unsuitable { border-left: 6px solid #e74c3c; }
        .warning { background: #fff3cd; padding: 10px; border-radius: 4px; margin-bottom: 10px; }
        .loading { color: #666; font-style: italic; }
    </style>
</head>
<body>
    <h1>Gearbox Selector</h1>
    <div class="container">
        <div class="input-section">
            <h3>Request (JSON)</h3>
            <textarea id="inputJson">{
  "motor_id": "M0002",
  "ratio": 10,
  "conditions": {
    "hours_per_day": 8,
    "load_type": "uniform",
    "mounting_direction": "horizontal"
  }
}</textarea>
            <button onclick="runCandidates()">Find candidates</button>
        </div>
        <div class="output-section">
            <div id="results">
                <p class="loading">Enter a motor id and ratio, then click Find candidates.</p>
            </div>
        </div>
    </div>

    <script>
        async function runCandidates() {
            const resultsDiv = document.getElementById('results');
            resultsDiv.innerHTML = '<p class="loading">Evaluating...</p>';
            try {
                const input = JSON.parse(document.getElementById('inputJson').value);
                const response = await fetch('/candidates', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify(input)
                });
                if (!response.ok) {
                    const err = await response.json();
                    throw new Error(JSON.stringify(err.detail) || 'Request failed');
                }
                render(await response.json());
            } catch (e) {
                resultsDiv.innerHTML = `<p style="color:red;">Error: ${e.message}</p>`;
            }
        }

        function render(data) {
            let html = `<h3>${data.motor.model_name} at i=${data.ratio}</h3>`;
            if (data.warnings.length > 0) {
                html += `<div class="warning">${data.warnings.join('<br>')}</div>`;
            }
            data.candidates.forEach(c => {
                html += `
                <div class="card ${c.suitability}">
                    <strong>${c.reducer.model_name}</strong> (${c.reducer.type})
                    SF ${c.service_factor.toFixed(2)} - ${c.suitability}<br>
                    ${c.output_rpm.toFixed(0)} rpm, ${c.output_torque.toFixed(2)} N·m
                    (rated ${c.rated_torque} N·m)<br>
                    ${c.bushing ? 'Bushing ' + c.bushing.code : 'Direct fit'}
                    ${c.adapter ? ' | Adapter ' + c.adapter.code : ''}
                </div>`;
            });
            document.getElementById('results').innerHTML = html;
        }
    </script>
</body>
</html>
"""


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def get_catalog() -> Catalog:
    """Shared catalog for request handlers."""
    try:
        return default_catalog()
    except (FileNotFoundError, CatalogLoadError) as e:
        raise HTTPException(status_code=503, detail=f"Catalog unavailable: {e}")


def _motor_or_404(catalog: Catalog, motor_id: str) -> Motor:
    motor = catalog.get_motor(motor_id)
    if motor is None:
        raise HTTPException(status_code=404, detail=f"Unknown motor id: {motor_id}")
    return motor


def _reducer_or_404(catalog: Catalog, reducer_id: str) -> Reducer:
    reducer = catalog.get_reducer(reducer_id)
    if reducer is None:
        raise HTTPException(status_code=404, detail=f"Unknown reducer id: {reducer_id}")
    return reducer


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the HTML UI."""
    return HTML_UI


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/catalog-status", tags=["System"])
async def catalog_status(catalog: Catalog = Depends(get_catalog)):
    """Record counts of the loaded catalog."""
    return catalog.summary()


@app.get("/load-types", tags=["Reference"])
async def list_load_types():
    """Get list of supported load types and their load factors."""
    return {
        "load_types": [lt.value for lt in LoadType],
        "load_factors": {lt.value: LOAD_FACTORS[lt.value] for lt in LoadType},
        "descriptions": LOAD_TYPE_DESCRIPTIONS,
    }


@app.get("/motors", response_model=list[Motor], tags=["Catalog"])
async def list_motors(
    brand: Optional[str] = None,
    series: Optional[str] = None,
    basic_type: Optional[str] = None,
    q: Optional[str] = Query(default=None, description="Case-insensitive model name search"),
    catalog: Catalog = Depends(get_catalog),
):
    """List catalog motors, optionally filtered."""
    return filter_motors(catalog.motors, brand, series, basic_type, q)


@app.get("/motors/{motor_id}", response_model=Motor, tags=["Catalog"])
async def get_motor(motor_id: str, catalog: Catalog = Depends(get_catalog)):
    """Get one motor by id."""
    return _motor_or_404(catalog, motor_id)


@app.get("/reducers", response_model=list[Reducer], tags=["Catalog"])
async def list_reducers(
    motor_id: Optional[str] = None,
    series: Optional[str] = None,
    reducer_type: Optional[str] = Query(default=None, alias="type"),
    catalog: Catalog = Depends(get_catalog),
):
    """
    List reducers.

    With motor_id, only reducers whose input bore accepts the motor shaft
    (directly or via a bushing) are returned.
    """
    if motor_id is None:
        reducers = list(catalog.reducers)
        if reducer_type:
            reducers = [r for r in reducers if r.type == reducer_type]
        if series:
            reducers = [r for r in reducers if r.series == series]
        return reducers

    motor = _motor_or_404(catalog, motor_id)
    return GearboxSelector(catalog).compatible_reducers(motor, series, reducer_type)


@app.get("/ratios", tags=["Catalog"])
async def list_ratios(
    motor_id: str,
    series: Optional[str] = None,
    reducer_type: Optional[str] = Query(default=None, alias="type"),
    catalog: Catalog = Depends(get_catalog),
):
    """Ratios, types and series available for a motor."""
    motor = _motor_or_404(catalog, motor_id)
    selector = GearboxSelector(catalog)
    return {
        "motor_id": motor.id,
        "types": selector.available_types(motor),
        "series": selector.available_series(motor, reducer_type),
        "ratios": selector.available_ratios(motor, series, reducer_type),
    }


@app.post("/candidates", response_model=SelectionReport, tags=["Selection"])
async def candidates(request: CandidateRequest, catalog: Catalog = Depends(get_catalog)):
    """
    Evaluate gearbox candidates for a motor and ratio.

    Candidates are sorted suitable first, then by service factor.
    """
    motor = _motor_or_404(catalog, request.motor_id)
    try:
        return GearboxSelector(catalog).generate_result(
            motor,
            request.ratio,
            request.conditions,
            series=request.series,
            reducer_type=request.reducer_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/select", response_model=SelectionResult, tags=["Selection"])
async def select(request: SelectRequest, catalog: Catalog = Depends(get_catalog)):
    """Confirm one reducer and return the full selection with drawings."""
    motor = _motor_or_404(catalog, request.motor_id)
    reducer = _reducer_or_404(catalog, request.reducer_id)
    try:
        result = GearboxSelector(catalog).select_reducer(motor, reducer, request.ratio, request.conditions)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(
            status_code=400,
            detail=f"{reducer.model_name} cannot take motor {motor.model_name} at ratio {request.ratio:g}",
        )
    return result


@app.get("/drawings", response_model=DrawingFiles, tags=["Catalog"])
async def drawings(
    series: str,
    size: int = Query(..., ge=0),
    stage: str = Query(...),
    bore: float = Query(..., ge=0, description="Flange bore, i.e. the motor shaft diameter (mm)"),
    tap: Optional[str] = Query(default=None, description="Motor mounting tap, e.g. M4"),
    catalog: Catalog = Depends(get_catalog),
):
    """Look up 2D/3D drawing files for a reducer configuration."""
    return find_drawings(catalog.drawings, series, size, stage, bore, tap)
