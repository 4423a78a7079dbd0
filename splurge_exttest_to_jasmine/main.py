"""Programmatic file API for splurge_exttest_to_jasmine.

``convert_file`` converts one file, ``convert_path`` converts a file or a
whole directory tree, and ``map_output_paths`` computes which output file
each input file of a directory is written to. All three are used by the
CLI and return ``Result`` instances instead of raising.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .context import ConverterConfig
from .converter import Converter
from .exceptions import ConversionError
from .helpers.path_utils import (
    PathValidationError,
    apply_mask,
    ensure_parent_dir,
    matches_mask,
    suggest_path_fixes,
    validate_source_path,
    validate_target_path,
)
from .result import Result

logger = logging.getLogger(__name__)


def map_output_paths(
    input_dir: str | Path, output_dir: str | Path, input_mask: str, output_mask: str
) -> dict[Path, Path]:
    """Map every file under ``input_dir`` matching ``input_mask`` to its output path.

    Subdirectories are walked recursively and their relative layout is
    reproduced under ``output_dir``. Entries whose name starts with ``.``
    are skipped, together with everything below a hidden directory.

    Returns:
        Input paths mapped to output paths, in sorted input order.
    """
    input_root = Path(input_dir)
    output_root = Path(output_dir)
    mappings: dict[Path, Path] = {}

    for path in sorted(input_root.rglob("*")):
        relative = path.relative_to(input_root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if not path.is_file() or not matches_mask(path.name, input_mask):
            continue
        output_name = apply_mask(path.name, input_mask, output_mask)
        mappings[path] = output_root / relative.parent / output_name

    return mappings


def convert_file(
    source_file: str | Path, target_file: str | Path | None = None, config: ConverterConfig | None = None
) -> Result[str]:
    """Convert one Ext.Test file.

    Args:
        source_file: Path of the file to convert.
        target_file: Where to write the result. When omitted, or when
            ``config.dry_run`` is set, nothing is written.
        config: Optional ``ConverterConfig``.

    Returns:
        ``Result`` holding the target path (or the source path when nothing
        was written), with the generated code under the
        ``generated_code`` metadata key.
    """
    if config is None:
        config = ConverterConfig()

    try:
        source_path = validate_source_path(source_file)
        if source_path.is_dir():
            raise PathValidationError(f"Source path is a directory: {source_file}", str(source_file), "not_a_file")
        target_path = validate_target_path(target_file) if target_file is not None else None
    except PathValidationError as e:
        return Result.failure(e)

    metadata: dict[str, object] = {"source_file": str(source_path)}

    try:
        with open(source_path, encoding="utf-8") as f:
            source_code = f.read()
        logger.debug(f"Read source code: {len(source_code)} characters from {source_path}")
    except (OSError, UnicodeDecodeError) as e:
        metadata["suggestions"] = suggest_path_fixes(e, source_path)
        return Result.failure(e, metadata)

    try:
        generated = Converter(config).convert(source_code)
    except ConversionError as e:
        logger.debug(f"Conversion of {source_path} failed: {e}")
        return Result.failure(e, metadata)

    metadata["generated_code"] = generated

    if target_path is None or config.dry_run:
        return Result.success(str(target_path or source_path), metadata)

    try:
        ensure_parent_dir(target_path)
        with open(target_path, "w", encoding="utf-8", newline="") as f:
            f.write(generated)
    except PathValidationError as e:
        return Result.failure(e, metadata)
    except OSError as e:
        metadata["suggestions"] = suggest_path_fixes(e, target_path)
        return Result.failure(e, metadata)

    logger.info(f"Converted {source_path} -> {target_path}")
    return Result.success(str(target_path), metadata)


def convert_path(
    input_path: str | Path, output_path: str | Path | None = None, config: ConverterConfig | None = None
) -> Result[list[str]]:
    """Convert a single file or every matching file of a directory.

    A directory input requires ``output_path``; its files are selected by
    ``config.input_mask`` and renamed through ``config.output_mask``. Files
    that fail are reported in the ``failures`` metadata entry and the
    remaining files are still converted unless ``config.fail_fast`` is set.

    Returns:
        ``Result`` holding the written (or, for a dry run, converted) paths.
        The ``generated_code`` metadata maps each of those paths to its
        code. A directory run with failures returns a warning result, or a
        failure when nothing converted.
    """
    if config is None:
        config = ConverterConfig()

    try:
        source = validate_source_path(input_path)
    except PathValidationError as e:
        return Result.failure(e)

    if not source.is_dir():
        single = convert_file(source, output_path, config)
        if not single.is_success():
            return Result.failure(single.error or ConversionError("Conversion failed"), single.metadata)
        path = single.unwrap()
        return Result.success([path], {"generated_code": {path: single.metadata["generated_code"]}})

    if output_path is None:
        return Result.failure(
            PathValidationError("An output directory is required when converting a directory", str(source), "missing")
        )

    mappings = map_output_paths(source, output_path, config.input_mask, config.output_mask)
    logger.info(f"Found {len(mappings)} file(s) matching '{config.input_mask}' in {source}")

    converted: list[str] = []
    generated_map: dict[str, str] = {}
    failures: dict[str, str] = {}

    for src, dest in mappings.items():
        res = convert_file(src, dest, config)
        if res.is_success():
            path = res.unwrap()
            converted.append(path)
            generated_map[path] = res.metadata["generated_code"]
            continue

        failures[str(src)] = str(res.error)
        logger.error(f"Failed to convert {src}: {res.error}")
        if config.fail_fast:
            return Result.failure(
                res.error or ConversionError("Conversion failed"),
                {"generated_code": generated_map, "failures": failures},
            )

    metadata = {"generated_code": generated_map, "failures": failures}
    if failures and not converted:
        return Result.failure(ConversionError(f"All {len(failures)} file(s) failed to convert", failures), metadata)
    if failures:
        return Result.warning(converted, [f"{src}: {err}" for src, err in failures.items()], metadata)
    return Result.success(converted, metadata)
