"""
Interactive studio shell.
"""

__all__ = ["Default"]

import shlex
from typing import Any, Awaitable, Callable

from loguru import logger

from veostudio.ai.video_generation import (
    AspectRatio,
    GenerateVideoParams,
    GenerationMode,
    Resolution,
    VeoModel,
)
from veostudio.core import Context, Operation, Provider, run_sync
from veostudio.core.exceptions import BadRequestError, BaseError
from veostudio.studio import (
    SELECTABLE_MODES,
    SERVICE_PRESETS,
    Studio,
    View,
    ViewAction,
)

MODE_ALIASES = {
    "text": GenerationMode.TEXT_TO_VIDEO,
    "frames": GenerationMode.FRAMES_TO_VIDEO,
    "references": GenerationMode.REFERENCES_TO_VIDEO,
    "refs": GenerationMode.REFERENCES_TO_VIDEO,
    "extend": GenerationMode.EXTEND_VIDEO,
}
MODEL_ALIASES = {"fast": VeoModel.VEO_FAST, "pro": VeoModel.VEO}
ASPECT_ALIASES = {
    "landscape": AspectRatio.LANDSCAPE,
    "portrait": AspectRatio.PORTRAIT,
}
MODEL_NAMES = {
    VeoModel.VEO_FAST: "Veo 3.1 Fast",
    VeoModel.VEO: "Veo 3.1 Pro",
}
ASPECT_NAMES = {
    AspectRatio.LANDSCAPE: "Landscape (16:9)",
    AspectRatio.PORTRAIT: "Portrait (9:16)",
}
RESOLUTION_NAMES = {
    Resolution.P720: "720p (Extendable)",
    Resolution.P1080: "1080p (HQ)",
}

HELP = """\
Compose:
  mode text|frames|references     switch mode, clears attachments
  prompt TEXT                     set the prompt
  preset ID | presets             use or list agency presets
  model fast|pro | aspect 16:9|9:16 | resolution 720p|1080p
  start PATH | end PATH | loop on|off               frames mode
  ref PATH | unref INDEX | style PATH               references mode
  video PATH                                        extend mode
  remove start|end|style|video
Run:
  generate | regenerate | extend | new | retry | save [PATH] | key
  status | ? | quit"""

Handler = Callable[[list[str]], Awaitable[str | None]]


class Default(Provider):
    studio: Studio | None
    _handlers: dict[str, Handler]

    def __init__(self, studio: Studio | None = None, **kwargs):
        self.studio = studio
        self._handlers = {
            "?": self._help,
            "help": self._help,
            "status": self._status,
            "mode": self._mode,
            "prompt": self._prompt,
            "preset": self._preset,
            "presets": self._presets,
            "model": self._model,
            "aspect": self._aspect,
            "resolution": self._resolution,
            "start": self._start,
            "end": self._end,
            "loop": self._loop,
            "ref": self._ref,
            "unref": self._unref,
            "style": self._style,
            "video": self._video,
            "remove": self._remove,
            "generate": self._generate,
            "regenerate": self._action,
            "extend": self._action,
            "new": self._action,
            "retry": self._action,
            "key": self._key,
            "save": self._save,
        }

    def __run__(
        self,
        operation: Operation | None = None,
        context: Context | None = None,
        **kwargs,
    ) -> Any:
        return run_sync(self.__arun__, operation=operation, context=context)

    async def __arun__(
        self,
        operation: Operation | None = None,
        context: Context | None = None,
        **kwargs,
    ) -> Any:
        studio = self._get_studio()
        self._print_welcome()
        snapshot = await studio.start()
        if snapshot.show_credential_prompt:
            print("No API key selected. Run 'key' to select one.")
        while True:
            try:
                statement = input("> ")
            except (KeyboardInterrupt, EOFError):
                return None
            if statement.strip() in ("quit", "exit"):
                return None
            if not statement.strip():
                continue
            try:
                output = await self.execute(statement)
                if output:
                    print(output)
            except BaseError as e:
                print(f"{type(e).__name__}: {e}")
            except Exception as e:
                logger.exception("Command failed")
                print(f"{type(e).__name__}: {e}")

    async def execute(self, statement: str) -> str | None:
        """Run one shell statement.

        Returns:
            Text to show the user.
        """
        args = shlex.split(statement)
        command, rest = args[0].lower(), args[1:]
        handler = self._handlers.get(command)
        if handler is None:
            raise BadRequestError(f"Unknown command {command}. Try ?")
        if handler == self._action:
            rest = [command]
        return await handler(rest)

    async def _help(self, args: list[str]) -> str:
        return HELP

    async def _status(self, args: list[str]) -> str:
        studio = self._get_studio()
        lines = [self._format_params(studio.composer.params)]
        gate = studio.composer.gate()
        if gate.disabled:
            lines.append(f"  submit: blocked ({gate.tooltip})")
        else:
            lines.append("  submit: ready")
        lines.append(self._format_view(studio.render()))
        return "\n".join(lines)

    async def _mode(self, args: list[str]) -> str:
        value = self._single(args, "mode")
        mode = MODE_ALIASES.get(value.lower())
        if mode is None:
            raise BadRequestError(f"Unknown mode {value}")
        if mode not in SELECTABLE_MODES:
            raise BadRequestError(
                "Extend mode starts from a generated 720p video. "
                "Run 'extend' on a result."
            )
        self._get_studio().composer.select_mode(mode)
        return f"Mode: {mode.value}"

    async def _prompt(self, args: list[str]) -> str:
        self._get_studio().composer.set_prompt(" ".join(args))
        return "Prompt set."

    async def _preset(self, args: list[str]) -> str:
        composer = self._get_studio().composer
        composer.apply_preset(self._single(args, "preset"))
        return self._format_params(composer.params)

    async def _presets(self, args: list[str]) -> str:
        return "\n".join(
            f"  {preset.id:<12}{preset.label}" for preset in SERVICE_PRESETS
        )

    async def _model(self, args: list[str]) -> str:
        value = self._single(args, "model")
        self._get_studio().composer.set_model(
            MODEL_ALIASES.get(value.lower(), value)
        )
        model = self._get_studio().composer.params.model
        return f"Model: {MODEL_NAMES[model]}"

    async def _aspect(self, args: list[str]) -> str:
        value = self._single(args, "aspect ratio")
        self._get_studio().composer.set_aspect_ratio(
            ASPECT_ALIASES.get(value.lower(), value)
        )
        params = self._get_studio().composer.params
        return f"Format: {ASPECT_NAMES[params.aspect_ratio]}"

    async def _resolution(self, args: list[str]) -> str:
        self._get_studio().composer.set_resolution(
            self._single(args, "resolution").lower()
        )
        params = self._get_studio().composer.params
        return f"Resolution: {RESOLUTION_NAMES[params.resolution]}"

    async def _start(self, args: list[str]) -> str:
        path = self._single(args, "path")
        ok = await self._get_studio().composer.attach_start_frame(path)
        return "Start frame attached." if ok else f"Could not read {path}"

    async def _end(self, args: list[str]) -> str:
        path = self._single(args, "path")
        ok = await self._get_studio().composer.attach_end_frame(path)
        return "End frame attached." if ok else f"Could not read {path}"

    async def _loop(self, args: list[str]) -> str:
        value = self._single(args, "on|off").lower()
        if value not in ("on", "off"):
            raise BadRequestError("Use loop on or loop off")
        self._get_studio().composer.set_looping(value == "on")
        return f"Looping {value}."

    async def _ref(self, args: list[str]) -> str:
        path = self._single(args, "path")
        composer = self._get_studio().composer
        ok = await composer.attach_reference_image(path)
        if not ok:
            return f"Could not read {path}"
        count = len(composer.params.reference_images)
        return f"Reference {count} attached."

    async def _unref(self, args: list[str]) -> str:
        value = self._single(args, "index")
        if not value.isdigit():
            raise BadRequestError("Reference index must be a number")
        self._get_studio().composer.remove_reference_image(int(value) - 1)
        return "Reference removed."

    async def _style(self, args: list[str]) -> str:
        path = self._single(args, "path")
        ok = await self._get_studio().composer.attach_style_image(path)
        return "Style image attached." if ok else f"Could not read {path}"

    async def _video(self, args: list[str]) -> str:
        path = self._single(args, "path")
        ok = await self._get_studio().composer.attach_input_video(path)
        if not ok:
            return f"Could not read {path}"
        return (
            "Video attached. Only videos generated in this session "
            "can be extended."
        )

    async def _remove(self, args: list[str]) -> str:
        target = self._single(args, "start|end|style|video").lower()
        composer = self._get_studio().composer
        if target == "start":
            composer.remove_start_frame()
        elif target == "end":
            composer.remove_end_frame()
        elif target == "style":
            composer.remove_style_image()
        elif target == "video":
            composer.remove_input_video()
        else:
            raise BadRequestError(f"Cannot remove {target}")
        return f"Removed {target}."

    async def _generate(self, args: list[str]) -> str:
        studio = self._get_studio()
        gate = studio.composer.gate()
        if gate.disabled:
            raise BadRequestError(gate.tooltip)
        print(self._format_view(studio.presenter.render_loading()))
        snapshot = await studio.submit()
        return self._after(snapshot.show_credential_prompt)

    async def _action(self, args: list[str]) -> str:
        action = {
            "regenerate": ViewAction.REGENERATE,
            "extend": ViewAction.EXTEND,
            "new": ViewAction.NEW_VIDEO,
            "retry": ViewAction.TRY_AGAIN,
        }[args[0]]
        studio = self._get_studio()
        if action == ViewAction.REGENERATE:
            print(self._format_view(studio.presenter.render_loading()))
        snapshot = await studio.handle(action)
        return self._after(snapshot.show_credential_prompt)

    async def _key(self, args: list[str]) -> str:
        snapshot = await self._get_studio().continue_with_credential()
        return self._after(snapshot.show_credential_prompt)

    async def _save(self, args: list[str]) -> str:
        path = await self._get_studio().save(args[0] if args else None)
        return f"Saved to {path}"

    def _after(self, show_credential_prompt: bool) -> str:
        text = self._format_view(self._get_studio().render())
        if show_credential_prompt:
            text += (
                "\nA valid, billing-enabled API key is required. "
                "Run 'key' to select one."
            )
        return text

    def _format_view(self, view: View) -> str:
        lines = [f"[{view.title}]"]
        if view.message:
            lines.append(view.message)
        if view.video:
            lines.append(f"Video: {view.video}")
        if view.actions:
            lines.append(
                "Actions: " + ", ".join(a.value for a in view.actions)
            )
        return "\n".join(lines)

    def _format_params(self, params: GenerateVideoParams) -> str:
        lines = [
            f"  mode:       {params.mode.value}",
            f"  prompt:     {params.prompt or '-'}",
            f"  model:      {MODEL_NAMES[params.model]}",
            f"  format:     {ASPECT_NAMES[params.aspect_ratio]}",
            f"  resolution: {RESOLUTION_NAMES[params.resolution]}",
        ]
        if params.mode == GenerationMode.FRAMES_TO_VIDEO:
            lines.append(f"  start:      {_name(params.start_frame)}")
            lines.append(f"  end:        {_name(params.end_frame)}")
            lines.append(f"  looping:    {params.is_looping}")
        elif params.mode == GenerationMode.REFERENCES_TO_VIDEO:
            names = [_name(i) for i in params.reference_images]
            lines.append(f"  references: {', '.join(names) or '-'}")
            lines.append(f"  style:      {_name(params.style_image)}")
        elif params.mode == GenerationMode.EXTEND_VIDEO:
            lines.append(f"  video:      {_name(params.input_video)}")
        return "\n".join(lines)

    def _single(self, args: list[str], name: str) -> str:
        if len(args) != 1:
            raise BadRequestError(f"Expected one {name}")
        return args[0]

    def _get_studio(self) -> Studio:
        component = getattr(self, "__component__", None)
        studio = self.studio or getattr(component, "studio", None)
        if studio is None:
            raise BadRequestError("No studio provided")
        return studio

    def _print_welcome(self):
        print("Welcome to veostudio. Type ? for commands.")


def _name(data: Any) -> str:
    if data is None:
        return "-"
    return data.source or "attached"
