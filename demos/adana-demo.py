# %%
import asyncio
import json
from pathlib import Path

import solzone
from solzone import io

# working folder
output_folder = "temp/adana"
output_folder_path = Path(output_folder).absolute()
output_folder_path.mkdir(parents=True, exist_ok=True)


def box(lon0, lat0, lon1, lat1):
    ring = [[lon0, lat0], [lon1, lat0], [lon1, lat1], [lon0, lat1], [lon0, lat0]]
    return {"type": "Polygon", "coordinates": [ring]}


def feature(geometry, class_id, sr_mean):
    return {"type": "Feature", "geometry": geometry, "properties": {"class": class_id, "sr_mean": sr_mean}}


# %%
# sample suitability layers
high = {
    "type": "FeatureCollection",
    "features": [
        feature(box(35.0, 37.0, 35.2, 37.2), "high", 1810.0),
        feature(box(35.2, 37.0, 35.4, 37.2), "high", 1790.0),
    ],
}
moderate = {
    "type": "FeatureCollection",
    "features": [feature(box(35.3, 37.1, 35.6, 37.3), "moderate", 1600.0)],
}
(output_folder_path / "high.geojson").write_text(json.dumps(high))
(output_folder_path / "moderate.geojson").write_text(json.dumps(moderate))

# %%
# load zones and pick a selection
inputs = solzone.YieldInputs.from_params(technology="thin_film")
session = solzone.SolzoneSession(inputs=inputs)
loaded = asyncio.run(
    session.load_zones(
        str(output_folder_path / "high.geojson"),
        str(output_folder_path / "moderate.geojson"),
    )
)
print(f"Loaded: {loaded.ok}, zones: {[z.label for z in loaded.zones]}")

view = session.select_class("high_mod")
io.write_region_geojson(view.region, output_folder_path / "allowed_high_mod.geojson", {"class": view.class_id})

# %%
# draw a polygon across both zones
outcome = session.submit_polygon(box(35.3, 37.1, 35.4, 37.3))
print(outcome.result.report())

# outside the allowed zone: rejected, prior result kept
rejected = session.submit_polygon(box(36.0, 38.0, 36.1, 38.1))
print(f"Rejected: {rejected.reason}")

# %%
# recompute with form values
form_inputs = solzone.YieldInputs.from_form(efficiency=0.20, performance_ratio=0.80, coverage_pct=30)
print(session.recompute(form_inputs).report())

# %%
# preset areas (km²) instead of a drawn polygon
preset = solzone.estimate_preset(
    "high_mod",
    {"high": 120.0, "moderate": 340.0},
    {z.class_id: z.sr_mean for z in loaded.zones},
    inputs.clamped(),
)
print(preset.report())
