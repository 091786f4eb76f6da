"""Basic library usage: configure once, then generate PDFs for several sources"""

import logging
from pathlib import Path

from pdfcomposer.config import Settings, build_config
from pdfcomposer.core.page import FontsStandard, PaperOrientation, PaperSize, PDFVersion
from pdfcomposer.core.pipeline import run_generate


HERE = Path(__file__).parent


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = Settings(
        output_dir=str(HERE / "output_pdfs_a6"),
        pdf_version=PDFVersion.v2_0,
        paper_size=PaperSize.A6,
        orientation=PaperOrientation.landscape,
        margins="20",
        font=FontsStandard.TimesRoman,
        # No Title rule, so each PDF's Title is its source file name.
        doc_info_entries={
            "Author": "author",
            "Keywords": "keywords",
            "Random": "random",        # only present in sample_file_01
            "Subject": "description",
            "Language": "language",
        },
    )
    sources = [
        HERE / "sample_mds" / "sample_file_01.md",
        HERE / "sample_mds" / "sample_file_02.md",
        HERE / "sample_mds" / "file_not_found.md",
        HERE / "sample_mds" / "untitled.txt",
    ]
    for result in run_generate(build_config(settings, sources)):
        print(f"{result.status.value:<8} {result.source} {result.output_path or result.message}")


if __name__ == "__main__":
    main()
