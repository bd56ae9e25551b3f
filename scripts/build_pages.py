"""
Paginate a sectioned HTML file and write paged HTML and/or PDF output.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pageflow.errors import PageflowError
from pageflow.flow import FlowSettings, PageFlow
from pageflow.html_output import render_document
from pageflow.parser import parse_html
from pageflow.pdf import ReportLabMeasurer, build_pdf

logger = logging.getLogger("pageflow.cli")

_GEOMETRY_OPTIONS = (
    "page_width",
    "page_height",
    "padding_top",
    "padding_bottom",
    "padding_x",
)


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the build script."""

    parser = argparse.ArgumentParser(
        description="Flow the sections of an HTML file into fixed-size pages."
    )
    parser.add_argument("input", type=Path, help="HTML file holding the sections.")
    parser.add_argument(
        "--content-selector",
        default="#content-source",
        help="CSS selector of the element holding the sections (falls back to <body>).",
    )
    parser.add_argument("--section-selector", default=None, help="Section selector.")
    parser.add_argument("--header-selector", default=None, help="Primary header selector.")
    parser.add_argument(
        "--sub-header-selector", default=None, help="Secondary header selector."
    )
    for option in _GEOMETRY_OPTIONS:
        parser.add_argument(
            f"--{option.replace('_', '-')}",
            dest=option,
            default=None,
            metavar="LENGTH",
            help="Length such as 8.5in, 816px, 612pt or 21cm.",
        )
    parser.add_argument(
        "--start-page", type=int, default=None, help="Number of the first page."
    )
    parser.add_argument(
        "--no-toc", action="store_true", help="Skip the table of contents."
    )
    parser.add_argument("--html", type=Path, default=None, help="Paged HTML output.")
    parser.add_argument("--pdf", type=Path, default=None, help="PDF output.")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> FlowSettings:
    """Return FlowSettings from parsed CLI arguments.

    Args:
        args: Parsed CLI namespace.
    Returns:
        FlowSettings for a static pass.
    """

    options: Dict[str, object] = {
        option: getattr(args, option) for option in _GEOMETRY_OPTIONS
    }
    options.update(
        section_selector=args.section_selector,
        header_selector=args.header_selector,
        sub_header_selector=args.sub_header_selector,
        page_start_number=args.start_page,
        generate_toc=not args.no_toc,
        editable=False,
    )
    return FlowSettings.from_options(options)


def main(argv: List[str] | None = None) -> int:
    """Paginate ``input`` and write the requested outputs.

    Returns:
        Process exit code.

    Example:
        >>> main(["book.html", "--pdf", "book.pdf"])  # doctest: +SKIP
        0
    """

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    if not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1
    if args.html is None and args.pdf is None:
        print("Error: nothing to write; pass --html and/or --pdf", file=sys.stderr)
        return 2

    try:
        settings = _settings_from_args(args)
    except PageflowError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    source_doc = parse_html(args.input.read_text(encoding="utf-8"))
    content = source_doc.select_one(args.content_selector)
    if content is None:
        content = source_doc.body
    if content is None:
        content = source_doc
        logger.warning("No %s or <body>; using the whole document", args.content_selector)
    output_doc = parse_html('<nav id="toc"></nav><div id="pages"></div>')
    flow = PageFlow(
        content_source=content,
        pages_container="#pages",
        toc_container="#toc",
        root=output_doc,
        measurer=ReportLabMeasurer(),
        settings=settings,
    )
    result = flow.flow()
    if result is None:
        return 1
    logger.info(
        "Paginated into %d pages with %d TOC entries",
        result.total_pages,
        len(result.toc_items),
    )

    if args.html is not None:
        args.html.parent.mkdir(parents=True, exist_ok=True)
        toc = flow.toc_container if settings.generate_toc and result.toc_items else None
        title = source_doc.title.get_text(strip=True) if source_doc.title else "Document"
        args.html.write_text(
            render_document(
                pages_container=flow.pages_container,
                settings=settings,
                toc_container=toc,
                title=title,
            ),
            encoding="utf-8",
        )
        logger.info("Wrote %s", args.html)
    if args.pdf is not None:
        args.pdf.parent.mkdir(parents=True, exist_ok=True)
        build_pdf(
            pages=flow.pages,
            output_path=args.pdf,
            settings=settings,
            toc_entries=result.toc_items if settings.generate_toc else None,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
