"""
Fill the contract template from JSON records and render the PDF(s).
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from contracts.fields import ContractRecord, contract_fields, rut_digits
from contracts.pdf.builder import build_contract_pdf
from contracts.pdf.pdf_constants import DEBUG_PAGINATION
from contracts.pdf.pdf_settings import LayoutConfig
from contracts.template import fill_template, load_contract_template, missing_placeholders

logger = logging.getLogger("contracts.cli")


def _parse_args() -> argparse.Namespace:
    """Return CLI arguments for the contract build script."""

    parser = argparse.ArgumentParser(
        description="Render a contract PDF from a JSON record or an already-filled text file."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--record",
        type=Path,
        help="JSON file with one record (or a list of records with --batch).",
    )
    source.add_argument(
        "--text",
        type=Path,
        help="Plain-text contract body with every placeholder already filled.",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Template file to fill instead of the bundled contract template.",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        type=Path,
        default=Path("output/contrato.pdf"),
        help="File path into which the resulting pdf will be saved.",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="Treat --record as a JSON list and write one PDF per record.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output/contratos"),
        help="Directory for batch output (used with --batch).",
    )
    parser.add_argument(
        "--watermark",
        type=Path,
        default=None,
        help="Optional PNG/JPEG drawn faintly behind every page.",
    )
    parser.add_argument(
        "--footer",
        default="WELI APP • Página {page}",
        help="Footer template; {page} is replaced by the page number.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Contract date as YYYY-MM-DD (defaults to today).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log page breaks and asset fallbacks.",
    )
    return parser.parse_args()


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose or DEBUG_PAGINATION else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _filled_text(*, template: str, data: Dict[str, object], today: date | None) -> str:
    """Return contract text for one record, warning about unfilled placeholders.

    Args:
        template: Contract template with ``<<placeholder>>`` tokens.
        data: Raw record as loaded from JSON.
        today: Optional contract date.
    Returns:
        Filled contract text.
    """

    record = ContractRecord.from_mapping(data)
    text = fill_template(template, contract_fields(record, today=today))
    leftover = missing_placeholders(text)
    if leftover:
        logger.warning("Unfilled placeholders: %s", ", ".join(leftover))
    return text


class RecordFileError(ValueError):
    """Raised when the ``--record`` payload does not match the requested mode."""


def _load_records(path: Path, *, batch: bool) -> List[Dict[str, object]]:
    """Return the records in ``path``.

    Raises:
        RecordFileError: When the file holds no records, or a list of
            records without ``--batch``.
    """

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        if not batch:
            raise RecordFileError(
                f"{path} holds a list of {len(payload)} record(s); pass --batch to render them all"
            )
        records = payload
    else:
        records = [payload]
    if not records or not all(isinstance(item, dict) and item for item in records):
        raise RecordFileError(f"{path} holds no contract record")
    return records


def _batch_targets(records: List[Dict[str, object]], output_dir: Path) -> List[Path]:
    """Return one output path per record, named after the player's RUT.

    Records sharing a RUT get the record index appended so no file is
    overwritten.
    """

    targets: List[Path] = []
    seen = set()
    for index, data in enumerate(records):
        stem = f"contrato-{rut_digits(data.get('rut_jugador')) or 'sin-rut'}"
        if stem in seen:
            logger.warning("Record %d repeats %s, writing it as %s-%d.pdf", index, stem, stem, index)
            stem = f"{stem}-{index}"
        seen.add(stem)
        targets.append(output_dir / f"{stem}.pdf")
    return targets


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def main() -> None:
    """Render one contract, or a directory of contracts with ``--batch``.

    Example:
        >>> main()  # doctest: +SKIP
    """

    args = _parse_args()
    _configure_logging(verbose=args.verbose)
    config = LayoutConfig(watermark=args.watermark, footer_template=args.footer)

    if args.text:
        _write(args.output_file, build_contract_pdf(args.text.read_text(encoding="utf-8"), config))
        logger.info("Wrote %s", args.output_file)
        return

    template = load_contract_template(args.template)
    try:
        records = _load_records(args.record, batch=args.batch)
    except RecordFileError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
    if not args.batch:
        text = _filled_text(template=template, data=records[0], today=args.date)
        _write(args.output_file, build_contract_pdf(text, config))
        logger.info("Wrote %s", args.output_file)
        return

    targets = _batch_targets(records, args.output_dir)
    for data, target in tqdm(zip(records, targets), total=len(records), desc="Contracts", unit="pdf"):
        text = _filled_text(template=template, data=data, today=args.date)
        _write(target, build_contract_pdf(text, config))
    logger.info("Wrote %d contract(s) to %s", len(records), args.output_dir)


if __name__ == "__main__":
    main()
