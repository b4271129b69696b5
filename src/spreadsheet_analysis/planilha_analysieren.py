"""
Analysiert eine Planilha von der Kommandozeile.

Aufruf:
    python src/spreadsheet_analysis/planilha_analysieren.py <datei> [--projeto ID] [--inicio YYYY-MM-DD]
        [--fim YYYY-MM-DD] [--salvar "Janeiro 2024"] [--pdf]
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from rich import print

from month_archive.modules import MonthArchive
from reports.modules import build_report_content, render_report_pdf, report_filename
from shared_modules.config import Config
from shared_modules.errors import SpreadsheetError
from spreadsheet_analysis.modules import analyze_file


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Análise de planilhas: horas, km e pontos/roteiros.")
    parser.add_argument("file", type=Path)
    parser.add_argument("--projeto", default="campo-largo")
    parser.add_argument("--inicio", default=None)
    parser.add_argument("--fim", default=None)
    parser.add_argument("--salvar", metavar="NOME_DO_MES", default=None)
    parser.add_argument("--pdf", action="store_true", help="Bericht ins Ausgabeverzeichnis schreiben")
    parser.add_argument("--config", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Einstiegspunkt:
    - Lädt zentrale Config (Pydantic-validiert), setzt Logging.
    - Analysiert die Datei und gibt das Ergebnis aus.
    - Optional: Monat archivieren und/oder PDF-Bericht schreiben.
    """
    args = parse_args(argv)
    config = Config(args.config)

    try:
        result = analyze_file(args.file, args.projeto).with_period(args.inicio, args.fim)
    except SpreadsheetError as e:
        logger.error(f"{e.code}: {e}")
        print(f"[red]{e.message}[/red]")
        return 1

    print(result.model_dump(mode="json", by_alias=True))

    if args.salvar:
        month_id = MonthArchive(config.db_path).save_month(args.projeto, result, display_name=args.salvar)
        print(f"Mês salvo: {month_id}")

    if args.pdf:
        content = build_report_content(
            result,
            args.projeto,
            config.projects.display_name(args.projeto),
            legends=config.projects.legends(args.projeto),
            month_label=args.salvar,
            config=config.report,
        )
        target = config.output_dir / report_filename(args.projeto, args.salvar)
        target.write_bytes(render_report_pdf(content))
        logger.info(f"PDF-Bericht geschrieben: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
