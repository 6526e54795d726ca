import asyncio

from veostudio.ai.video_generation import (
    GenerateVideoParams,
    Resolution,
    VideoGeneration,
)
from veostudio.core import setup_logging
from veostudio.interface.credential import Credential
from veostudio.studio import GenerationWorkflow, WorkflowState


def playVideoGeneration():
    print("\n----- ----- ----- ----- ----- ----- \nVideo Generation\n-----")
    v = VideoGeneration(__unpack__=True, __provider__="google")
    result = v.generate(
        params=GenerateVideoParams(
            prompt="Hamsters doing cartwheels on snow on Mars",
            resolution=Resolution.P720,
        )
    )
    print(result.playable)
    print(result.handle)


async def playExtend():
    print("\n----- ----- ----- ----- ----- ----- \nExtend\n-----")
    w = GenerationWorkflow(
        generator=VideoGeneration(__provider__="google"),
        credential=Credential(__provider__="environment"),
    )
    snapshot = await w.start()
    if snapshot.show_credential_prompt:
        await w.continue_with_credential()
    snapshot = await w.submit(
        GenerateVideoParams(prompt="A paper boat drifting down a gutter")
    )
    print(snapshot.state, snapshot.error_message)
    if snapshot.state != WorkflowState.SUCCESS:
        return
    seed = w.extend().initial_values
    seed.prompt = "The boat sails into a storm drain"
    snapshot = await w.submit(seed)
    print(snapshot.state, snapshot.error_message)
    if snapshot.result:
        print(snapshot.result.playable)


if __name__ == "__main__":
    setup_logging(level="DEBUG")
    playVideoGeneration()
    asyncio.run(playExtend())
