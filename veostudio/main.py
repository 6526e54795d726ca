import argparse
import sys

from veostudio.ai.video_generation import GenerationMode
from veostudio.core import StudioConfig, run_sync, setup_logging, stop_loop
from veostudio.core.exceptions import BadRequestError, BaseError, InternalError
from veostudio.interface.cli import CLI
from veostudio.studio import Studio, WorkflowState

MODES = {
    "text": GenerationMode.TEXT_TO_VIDEO,
    "frames": GenerationMode.FRAMES_TO_VIDEO,
    "references": GenerationMode.REFERENCES_TO_VIDEO,
}


def load(config: str | None) -> Studio:
    """
    Load the studio from the configuration
    """
    studio_config = StudioConfig.load(config)
    setup_logging(**studio_config.logging.to_dict())
    return Studio.from_config(studio_config)


def shell(config: str | None) -> None:
    """
    veostudio Shell
    """
    studio = load(config)
    CLI(studio=studio).__run__()


async def agenerate(
    config: str | None,
    prompt: str,
    mode: str,
    model: str | None,
    aspect: str | None,
    resolution: str | None,
    start: str | None,
    end: str | None,
    loop: bool,
    refs: list[str],
    style: str | None,
    out: str | None,
) -> str:
    """
    veostudio Generate
    """
    studio = load(config)
    composer = studio.composer
    if mode not in MODES:
        raise BadRequestError(f"Unknown mode {mode}")
    composer.select_mode(MODES[mode])
    composer.set_prompt(prompt)
    if model:
        composer.set_model(model)
    if aspect:
        composer.set_aspect_ratio(aspect)
    if resolution:
        composer.set_resolution(resolution)
    attachments = [
        (start, composer.attach_start_frame),
        (end, composer.attach_end_frame),
        (style, composer.attach_style_image),
        *[(path, composer.attach_reference_image) for path in refs],
    ]
    for path, attach in attachments:
        if path is not None and not await attach(path):
            raise BadRequestError(f"Could not read {path}")
    if loop:
        composer.set_looping(True)

    snapshot = await studio.start()
    if snapshot.show_credential_prompt:
        snapshot = await studio.continue_with_credential()
    snapshot = await studio.submit()
    if snapshot.state != WorkflowState.SUCCESS:
        raise InternalError(snapshot.error_message or "No API key selected.")
    return await studio.save(out)


def main():
    parser = argparse.ArgumentParser(
        prog="veostudio", description="Veo video studio"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    shell_parser = subparsers.add_parser(
        "shell", help="Start the interactive studio"
    )
    generate_parser = subparsers.add_parser(
        "generate", help="Generate one video and save it"
    )
    common_arguments = [
        ("--config", str, None, "Config file", None),
    ]
    generate_arguments = [
        ("prompt", str, "", "Prompt", "?"),
        ("--mode", str, "text", "text, frames or references", None),
        ("--model", str, None, "Model id", None),
        ("--aspect", str, None, "Aspect ratio, 16:9 or 9:16", None),
        ("--resolution", str, None, "Resolution, 720p or 1080p", None),
        ("--start", str, None, "Start frame image", None),
        ("--end", str, None, "End frame image", None),
        ("--ref", str, [], "Reference image, up to three", "*"),
        ("--style", str, None, "Style image", None),
        ("--out", str, None, "Output path", None),
    ]
    for arg in common_arguments:
        shell_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3], nargs=arg[4]
        )
        generate_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3], nargs=arg[4]
        )
    for arg in generate_arguments:
        generate_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3], nargs=arg[4]
        )
    generate_parser.add_argument(
        "--loop", action="store_true", help="Loop back to the start frame"
    )

    args = parser.parse_args()
    if args.command == "shell":
        try:
            shell(config=args.config)
        except KeyboardInterrupt:
            sys.exit(0)
        finally:
            stop_loop()
    elif args.command == "generate":
        try:
            path = run_sync(
                agenerate,
                config=args.config,
                prompt=args.prompt,
                mode=args.mode,
                model=args.model,
                aspect=args.aspect,
                resolution=args.resolution,
                start=args.start,
                end=args.end,
                loop=args.loop,
                refs=args.ref,
                style=args.style,
                out=args.out,
            )
            print(path)
        except BaseError as e:
            print(f"{type(e).__name__}: {e}", file=sys.stderr)
            sys.exit(1)
        except KeyboardInterrupt:
            sys.exit(0)
        finally:
            stop_loop()
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
