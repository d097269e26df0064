"""
GeoCity Scene Generator - Main CLI

Generates a 3D city scene from GeoJSON map extracts.

Usage:
    python -m geocity.main <input_dir> [--output-dir DIR] [--output-name NAME]

Example:
    python -m geocity.main ./rome --output-dir ./output --output-name rome
"""

import argparse
import json
import logging
import os
import sys
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from . import __version__
from .config import PipelineConfig
from .errors import GeoCityError
from .io.geojson_reader import GeoJSONReader, list_geojson_files
from .io.scene_sink import InMemorySceneSink
from .models.element import ElementKind
from .io.obj_exporter import export_scene, validate_obj_file
from .processing.features import ExpansionStats, expand_features
from .processing.normalizer import compute_scene_bounds, normalize
from .generators.city_generator import BuildStats, build_city


@dataclass
class PipelineStats:
    """Statistics from the pipeline run."""
    files_read: int = 0
    features_read: int = 0
    features_unclassified: int = 0
    features_malformed: int = 0
    elements_expanded: int = 0
    rings_dropped: int = 0
    holes_dropped: int = 0
    elements_built: int = 0
    elements_skipped: int = 0
    meshes: int = 0
    triangles: int = 0
    quads: int = 0
    trees: int = 0
    roofs: int = 0
    obj_vertices: int = 0
    build_time_s: float = 0.0
    processing_time_ms: int = 0
    warnings: List[str] = field(default_factory=list)


@dataclass
class PipelineReport:
    """Report from pipeline run."""
    output_name: str
    version: str
    success: bool
    stats: PipelineStats
    output_files: List[str]
    errors: List[str] = field(default_factory=list)
    meshes_by_kind: Dict[str, int] = field(default_factory=dict)
    scene_bounds: Dict[str, float] = field(default_factory=dict)
    config_used: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineResult:
    """
    Complete result of pipeline execution.

    Supports two output modes:
    - 'file': Writes OBJ/MTL/instances/report files to disk (CLI mode)
    - 'memory': Returns the populated scene sink

    Attributes:
        success: Whether pipeline completed without errors
        report: Detailed statistics and metadata
        obj_path: Path to the OBJ file (file mode only)
        scene: The populated scene sink (both modes, None on failure)
    """
    success: bool
    report: PipelineReport
    obj_path: Optional[str] = None
    scene: Optional[InMemorySceneSink] = None


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging to console and optionally to file.

    Args:
        verbose: If True, use DEBUG level; otherwise INFO
        log_file: Optional path to log file. If provided, logs will be written to file.
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)


def run_pipeline(
    config: PipelineConfig,
    output_mode: str = "file"
) -> PipelineResult:
    """
    Run the complete scene generation pipeline.

    Steps:
    1. Read every .geojson file of the input directory
    2. Classify and expand features into elements
    3. Compute global scene bounds
    4. Normalize elements into the frame
    5. Build meshes and tree instances into a scene sink
    6. Export OBJ/MTL/instances (file mode)
    7. Generate report

    Args:
        config: Pipeline configuration
        output_mode: "file" to write output files (default), "memory" to
            return the scene only

    Returns:
        PipelineResult with report, and the OBJ path in file mode
    """
    logger = logging.getLogger(__name__)

    start_time = time.time()
    stats = PipelineStats()
    errors: List[str] = []
    output_files: List[str] = []

    config_used = {
        'input_dir': config.input_dir,
        'output_dir': config.output_dir,
        'frame_size': config.frame_size,
        'debug_feature_id': config.debug_feature_id,
    }

    def fail(message: str) -> PipelineResult:
        logger.error(message)
        errors.append(message)
        stats.processing_time_ms = int((time.time() - start_time) * 1000)
        report = PipelineReport(
            output_name=config.output_name,
            version=__version__,
            success=False,
            stats=stats,
            output_files=output_files,
            errors=errors,
            config_used=config_used,
        )
        return PipelineResult(success=False, report=report)

    # Step 1-2: Read and expand features
    logger.info(f"Reading GeoJSON files from {config.input_dir}")
    expansion = ExpansionStats()
    elements = []
    try:
        paths = list_geojson_files(config.input_dir)
        if not paths:
            raise FileNotFoundError(f"No .geojson files found in {config.input_dir}")

        for path in paths:
            features = GeoJSONReader(path).read()
            if config.debug_feature_id:
                features = (f for f in features if f.feature_id == config.debug_feature_id)
            elements.extend(expand_features(features, config.frame_size, expansion))
            stats.files_read += 1

    except (OSError, ValueError, TypeError) as e:
        return fail(f"Failed to read input: {e}")

    stats.features_read = expansion.features
    stats.features_unclassified = expansion.other_features
    stats.features_malformed = expansion.malformed_features
    stats.elements_expanded = expansion.elements
    stats.rings_dropped = expansion.dropped_rings
    stats.holes_dropped = expansion.dropped_holes

    logger.info(f"Read {stats.features_read} features from {stats.files_read} files")

    if config.debug_feature_id:
        logger.info(
            f"DEBUG MODE: Processing only feature {config.debug_feature_id} "
            f"({len(elements)} elements)"
        )

    # Step 3-5: Bounds, normalization, build
    sink = InMemorySceneSink()
    build_stats = BuildStats()
    bounds = None
    normalized = []
    try:
        # Nothing to place: the camera, floor and sky are still emitted
        if any(e.kind != ElementKind.OTHER for e in elements):
            bounds = compute_scene_bounds(elements)
            normalized = normalize(elements, bounds, config.frame_size)
        else:
            logger.warning("No drawable elements found, building an empty scene")

        logger.info(f"Building {len(normalized)} elements")
        warnings = build_city(normalized, sink, observer=build_stats)

    except (GeoCityError, ValueError) as e:
        return fail(f"Scene generation failed: {e}")

    stats.warnings.extend(warnings)
    stats.elements_built = build_stats.elements
    stats.elements_skipped = len(warnings)
    stats.meshes = build_stats.meshes
    stats.triangles = build_stats.triangles
    stats.quads = build_stats.quads
    stats.trees = build_stats.trees
    stats.roofs = build_stats.roofs
    stats.build_time_s = build_stats.total_time_s

    logger.info(
        f"Built {stats.elements_built} elements: {stats.meshes} meshes, "
        f"{stats.triangles} triangles, {stats.quads} quads, {stats.trees} trees"
    )
    if stats.elements_skipped:
        logger.warning(f"Skipped {stats.elements_skipped} elements")

    # Step 6: Export
    obj_path = None
    if output_mode == "file":
        os.makedirs(config.output_dir, exist_ok=True)
        obj_path = os.path.join(config.output_dir, f"{config.output_name}.obj")

        logger.info(f"Exporting scene to {obj_path}")
        try:
            export_stats = export_scene(
                sink,
                obj_path,
                comment=f"GeoCity {__version__} - {config.output_name}"
            )
        except OSError as e:
            return fail(f"Failed to export scene: {e}")

        stats.obj_vertices = export_stats.total_vertices
        stem = os.path.splitext(obj_path)[0]
        output_files.extend([obj_path, stem + ".mtl", stem + "_instances.json"])

        # Validate output
        obj_errors = validate_obj_file(obj_path)
        if obj_errors:
            errors.extend(f"OBJ: {e}" for e in obj_errors)

    elapsed_ms = int((time.time() - start_time) * 1000)
    stats.processing_time_ms = elapsed_ms

    # Step 7: Report
    report = PipelineReport(
        output_name=config.output_name,
        version=__version__,
        success=len(errors) == 0,
        stats=stats,
        output_files=output_files,
        errors=errors,
        meshes_by_kind=dict(build_stats.meshes_by_kind),
        scene_bounds={
            'min_x': bounds.min_x,
            'min_y': bounds.min_y,
            'max_x': bounds.max_x,
            'max_y': bounds.max_y,
        } if bounds is not None else {},
        config_used=config_used,
    )

    if output_mode == "file":
        report_path = os.path.join(
            config.output_dir,
            f"{config.output_name}_report.json"
        )
        output_files.append(report_path)
        with open(report_path, 'w', encoding='utf-8') as f:
            json.dump(asdict(report), f, indent=2)
        logger.info(f"Report saved to {report_path}")

    logger.info(f"Pipeline completed in {elapsed_ms}ms")

    return PipelineResult(
        success=report.success,
        report=report,
        obj_path=obj_path,
        scene=sink,
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='GeoCity Scene Generator - Generate a 3D city scene from GeoJSON'
    )

    parser.add_argument(
        'input_dir',
        help='Directory containing .geojson files'
    )

    parser.add_argument(
        '--output-dir',
        default='./output',
        help='Output directory for generated files (default: ./output)'
    )

    parser.add_argument(
        '--output-name',
        default='city',
        help='Base name of the generated files (default: city)'
    )

    parser.add_argument(
        '--frame-size',
        type=float,
        default=50.0,
        help='Side of the normalized scene square (default: 50)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--no-log-file',
        action='store_true',
        help='Disable log file output (only console)'
    )

    # Debug mode
    parser.add_argument(
        '--debug-feature-id',
        type=str,
        default=None,
        help='Process only a single feature by id, e.g. way_123 (for debugging)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args()

    # Create output directory early so we can put log file there
    os.makedirs(args.output_dir, exist_ok=True)

    log_file = None
    if not args.no_log_file:
        log_file = os.path.join(args.output_dir, f"{args.output_name}.log")

    setup_logging(args.verbose, log_file)

    try:
        config = PipelineConfig(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            output_name=args.output_name,
            frame_size=args.frame_size,
            verbose=args.verbose,
            debug_feature_id=args.debug_feature_id,
        )

        result = run_pipeline(config, output_mode="file")
        report = result.report

        if result.success:
            print(f"\nSuccess! Built {report.stats.elements_built} elements")
            print(f"Features: {report.stats.features_read}, "
                  f"unclassified: {report.stats.features_unclassified}")
            print(f"Meshes: {report.stats.meshes} "
                  f"({report.stats.triangles} triangles, {report.stats.quads} quads)")
            print(f"Trees: {report.stats.trees}, roofs: {report.stats.roofs}")

            if report.meshes_by_kind:
                print(f"\nMeshes by kind:")
                for kind, count in sorted(report.meshes_by_kind.items(), key=lambda x: -x[1]):
                    print(f"  {kind}: {count}")

            if report.stats.elements_skipped:
                print(f"\nSkipped elements: {report.stats.elements_skipped}")

            print(f"Output files: {', '.join(report.output_files)}")
            if log_file:
                print(f"Log file: {log_file}")
            return 0
        else:
            print(f"\nPipeline failed with errors:")
            for error in report.errors:
                print(f"  - {error}")
            if log_file:
                print(f"See log file for details: {log_file}")
            return 1

    except Exception as e:
        logging.exception(f"Pipeline failed: {e}")
        if log_file:
            print(f"See log file for details: {log_file}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
