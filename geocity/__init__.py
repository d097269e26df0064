"""
GeoCity Scene Generator

A standalone Python pipeline that turns tagged vector-map features
(GeoJSON exported from OpenStreetMap) into a renderable city scene:
extruded buildings with roofs, ground slabs for water and vegetation,
ribbons for roads and waterways, and instanced trees.

Can be used as:
- CLI tool: python -m geocity.main <input_dir>
- Library: geocity.main.run_pipeline(PipelineConfig(...))
"""

__version__ = "0.3.0"
__author__ = "GeoCity Team"
