"""
Application entry point — CLI parsing, dependency checks, Qt launch.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="fluidblob",
        description="Fluid Blob — ambient, mouse-reactive blurred colour background.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                            # 120 circles, default palette\n"
            "  %(prog)s --count 60 --palette ocean  # fewer circles, ocean palette\n"
            "  %(prog)s --blur 40 --quality 40      # sharper, higher render quality\n"
            "  %(prog)s --list-palettes             # show available palettes\n"
            "  %(prog)s -v                          # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--count", type=int, default=120, help="Number of circles (0–400, default 120)")
    p.add_argument("--palette", type=str, default="default", help="Colour palette")
    p.add_argument("--speed", type=float, default=1.5, help="Drift speed factor (0–10, default 1.5)")
    p.add_argument("--smoothness", type=float, default=7.0, help="Cursor push strength (default 7)")
    p.add_argument("--radius", type=float, default=100.0, help="Circle radius in px (default 100)")
    p.add_argument("--blur", type=float, default=90.0, help="Glass blur in px (default 90)")
    p.add_argument("--shadow", type=float, default=10.0, help="Glow radius in px (default 10)")
    p.add_argument("--quality", type=int, default=25, help="Render quality %% (10–60, default 25)")
    p.add_argument("--list-palettes", action="store_true", help="List palettes and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("fluidblob")

    # List palettes
    if args.list_palettes:
        from .palettes import PALETTES, list_palettes
        print("Available palettes:")
        for key in list_palettes():
            print(f"  {key:10s}  {' '.join(PALETTES[key])}")
        sys.exit(0)

    # Dependency check
    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    # Validate
    if not (0 <= args.count <= 400):
        print("ERROR: --count must be 0–400.", file=sys.stderr)
        sys.exit(1)

    if not (0 <= args.speed <= 10):
        print("ERROR: --speed must be 0–10.", file=sys.stderr)
        sys.exit(1)

    if args.radius <= 0 or args.blur < 0 or args.shadow < 0 or args.smoothness < 0:
        print("ERROR: --radius must be positive; --blur, --shadow and "
              "--smoothness must not be negative.", file=sys.stderr)
        sys.exit(1)

    if not (10 <= args.quality <= 60):
        print("ERROR: --quality must be 10–60.", file=sys.stderr)
        sys.exit(1)

    from .palettes import PALETTES, get_palette
    if args.palette not in PALETTES:
        from .palettes import list_palettes
        avail = ", ".join(list_palettes())
        print(f"ERROR: Unknown palette '{args.palette}'. Available: {avail}", file=sys.stderr)
        sys.exit(1)

    # Launch
    logger.info("Starting Fluid Blob v%s", __version__)
    logger.info("Circles: %d, Palette: %s, Quality: %d%%", args.count, args.palette, args.quality)

    from PyQt5.QtWidgets import QApplication
    from .engine import FieldParams, PointField
    from .main_window import MainWindow

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    app.setStyle("Fusion")
    app.setApplicationName("Fluid Blob")
    app.setApplicationVersion(__version__)

    # Dark theme
    app.setStyleSheet("""
        QMainWindow, QWidget {
            background: #15151c;
            color: #d0d0e0;
        }
        QGroupBox {
            font-weight: bold;
            font-size: 12px;
            color: #b8a8ff;
            border: 1px solid #2c2c3a;
            border-radius: 6px;
            margin-top: 8px;
            padding-top: 14px;
        }
        QGroupBox::title {
            subcontrol-origin: margin;
            subcontrol-position: top left;
            padding: 2px 8px;
        }
        QPushButton {
            background: #22222e;
            border: 1px solid #3c3c4e;
            border-radius: 5px;
            padding: 5px 12px;
            font-size: 12px;
        }
        QPushButton:hover {
            border-color: #6a6a88;
        }
        QPushButton:checked {
            background: #3a3a58;
        }
        QComboBox {
            background: #22222e;
            border: 1px solid #3c3c4e;
            border-radius: 4px;
            padding: 4px 8px;
        }
        QSlider::groove:horizontal {
            height: 4px;
            background: #2c2c3a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            background: #be33ff;
            width: 14px;
            height: 14px;
            margin: -5px 0;
            border-radius: 7px;
        }
        QLabel {
            font-size: 12px;
        }
        QStatusBar {
            color: #8a8aa0;
            font-size: 11px;
        }
    """)

    params = FieldParams(
        blur_radius=args.blur,
        circle_radius=args.radius,
        shadow_radius=args.shadow,
        count=args.count,
        smoothness=args.smoothness,
        speed=args.speed,
    )
    field = PointField(960, 640, params=params, palette=get_palette(args.palette))

    window = MainWindow(field, render_scale=args.quality / 100)
    window.resize(1280, 720)
    window.show()

    sys.exit(app.exec_())
