# tex_to_png.py
#
# Turns recorded frames (output_dir/<structure>/frame_NNNN.tex) into PNG images:
# xelatex writes the PDF into a build/ directory next to the frames, pdftoppm
# writes the image into png/.
import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path

from tqdm import tqdm

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("xelatex", "pdftoppm")


def missing_tools():
    return [tool for tool in REQUIRED_TOOLS if shutil.which(tool) is None]


def frame_files(frame_dir):
    return sorted(Path(frame_dir).glob("frame_*.tex"))


def compile_frame(tex_file, build_dir, png_dir) -> Path:
    """Compile one frame; raises CalledProcessError / OSError when a tool fails."""
    subprocess.run(["xelatex", "-interaction=nonstopmode", "-output-directory", str(build_dir), str(tex_file)],
                   check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    pdf_file = build_dir / f"{tex_file.stem}.pdf"
    if not pdf_file.exists():
        raise FileNotFoundError(f"xelatex produced no PDF for {tex_file.name}")
    subprocess.run(["pdftoppm", "-png", "-singlefile", str(pdf_file), str(png_dir / tex_file.stem)],
                   check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    return png_dir / f"{tex_file.stem}.png"


def compile_frames(frame_dir, png_dir=None):
    """
    Compile every frame of one structure. Returns the list of error messages;
    an empty list means every frame has its PNG.
    """
    frame_dir = Path(frame_dir)
    missing = missing_tools()
    if missing:
        errors = [f"Cannot compile {frame_dir}: {', '.join(missing)} not found on PATH"]
        logger.error(errors[0])
        return errors

    png_dir = Path(png_dir) if png_dir else frame_dir / "png"
    build_dir = frame_dir / "build"
    png_dir.mkdir(parents=True, exist_ok=True)
    build_dir.mkdir(parents=True, exist_ok=True)

    tex_files = frame_files(frame_dir)
    errors = []
    for tex_file in tqdm(tex_files, desc=f"Compiling {frame_dir.name}"):
        try:
            compile_frame(tex_file, build_dir, png_dir)
        except (subprocess.CalledProcessError, OSError) as e:
            errors.append(f"Error processing {tex_file.name}: {e}")

    for err in errors:
        logger.error(err)
    if not errors:
        logger.info(f"{frame_dir.name}: {len(tex_files)} frames converted to PNG in {png_dir}")
    return errors


def compile_recording(output_dir, kinds):
    """Compile the frames of each recorded structure kind; returns {kind: errors}."""
    output_dir = Path(output_dir)
    return {kind: compile_frames(output_dir / kind.value) for kind in kinds}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
    parser = argparse.ArgumentParser(description="Compile recorded dsviz frames to PNG.")
    parser.add_argument("frame_dir", help="Directory holding frame_NNNN.tex files")
    parser.add_argument("--png-dir", default=None, help="Where the PNG files go (default: <frame_dir>/png)")
    args = parser.parse_args()
    sys.exit(1 if compile_frames(args.frame_dir, args.png_dir) else 0)
