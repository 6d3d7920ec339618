from __future__ import annotations
import typer, json, asyncio, logging, sys
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from pathlib import Path
from typing import Optional
from .config import load_settings
from .fuse.processor import FrameProcessor, Session
from .runtime.events import Event, ws_broadcast

app = typer.Typer(add_completion=False, help="FaceEventKit CLI (fek)")

def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(message)s", handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
                        force=True)

def _emit(session: Session) -> list[str]:
    counts = session.counts()
    return [Event(type=t, counts=counts).model_dump_json() for t in session.fired]

async def _track(images, detect, proc: FrameProcessor, queue: Optional["asyncio.Queue[str]"] = None,
                 bcast: Optional["asyncio.Task"] = None):
    """
    Feed camera images through `detect` and the processor, echoing JSONL events.
    Yields to the loop on every frame so the broadcaster can accept clients.
    """
    tracking = False
    for img in images:
        await asyncio.sleep(0)
        if bcast is not None and bcast.done():
            bcast.result()  # re-raises a broadcaster failure (e.g. port in use)
            raise RuntimeError("WebSocket broadcaster stopped")
        counts = proc.process_frame(detect(img))
        if counts is None: continue  # no face this frame
        if not tracking:
            tracking = True; print("[green]TRACKING...[/green]", file=sys.stderr)
        for line in _emit(proc.session):
            typer.echo(line)
            if queue is not None: await queue.put(line)
    typer.echo(proc.session.counts().model_dump_json())

@app.command()
def run(config: str = typer.Option("examples/settings.yaml", help="YAML settings"),
        ws: bool = typer.Option(False, help="Broadcast events over WebSocket"),
        host: str = "0.0.0.0", port: int = 8765,
        camera: Optional[int] = 0, width: int = 640, height: int = 480,
        verbose: bool = typer.Option(False, "--verbose", "-v")):
    """
    Track the camera face and print one JSONL event per blink / mouth opening / eyebrow raise.
    """
    from .io.camera import frames
    from .face.landmarks import FaceLandmarks
    _setup_logging(verbose)
    proc = FrameProcessor(load_settings(config))
    faces = FaceLandmarks()
    queue: "asyncio.Queue[str]" = asyncio.Queue()

    async def main():
        images = (f["image"] for f in frames(camera, width, height))
        try:
            if not ws:
                await _track(images, faces, proc)
                return
            bcast = asyncio.create_task(ws_broadcast(queue, host, port))
            try:
                await _track(images, faces, proc, queue, bcast)
            finally:
                bcast.cancel()
        finally:
            faces.close()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except OSError as e:
        print(f"[red]WebSocket broadcast failed:[/red] {e}", file=sys.stderr)
        raise typer.Exit(1)

@app.command()
def replay(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSONL: one landmark list (or null) per line"),
           config: Optional[str] = typer.Option(None, help="YAML settings"),
           events: bool = typer.Option(True, help="Print each event as it fires"),
           verbose: bool = typer.Option(False, "--verbose", "-v")):
    """
    Run recorded landmark frames through the detectors and print the final counts.
    """
    _setup_logging(verbose)
    proc = FrameProcessor(load_settings(config))
    with open(path, "r") as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.strip()
            if not line: continue
            try:
                frame = json.loads(line)
            except json.JSONDecodeError as e:
                raise typer.BadParameter(f"line {lineno}: {e}") from e
            if isinstance(frame, dict): frame = frame.get("landmarks")
            if frame is not None and not isinstance(frame, list):
                raise typer.BadParameter(f"line {lineno}: expected a landmark list or null, got {type(frame).__name__}")
            if proc.process_frame(frame) is None: continue
            if events:
                for ev in _emit(proc.session): typer.echo(ev)
    typer.echo(proc.session.counts().model_dump_json())

if __name__ == "__main__":
    app()
