from veostudio.core import FrozenDataModel
from veostudio.core.exceptions import NotFoundError


class ServicePreset(FrozenDataModel):
    id: str
    label: str
    prompt: str


SERVICE_PRESETS: tuple[ServicePreset, ...] = (
    ServicePreset(
        id="web",
        label="Web Dev",
        prompt=(
            "A high-end cinematic 3D motion graphics video showing "
            "professional web development. Lines of code glowing in neon "
            "blue stream across the screen. Abstract glass server racks "
            "rotate while a sleek website dashboard interface emerges. "
            "Professional lighting, 8k, modern agency aesthetic."
        ),
    ),
    ServicePreset(
        id="mtech",
        label="MTech Help",
        prompt=(
            "Academic motion graphics for UK/USA MTech students. Floating "
            "complex mathematical equations and glowing circuit patterns. "
            "A 3D laptop icon pulses as a graduation cap appears in a swirl "
            "of digital particles. Clean, sophisticated, professional blue "
            "and white color scheme."
        ),
    ),
    ServicePreset(
        id="restaurant",
        label="Restaurant",
        prompt=(
            "Elegant motion graphics for a high-end restaurant. Gourmet food "
            "close-ups with stylized typography appearing over steam. Golden "
            "bokeh transitions, 3D cutlery silhouettes, and a 'Book Now' "
            "interface appearing with smooth animations. Warm, inviting, "
            "professional cinematography."
        ),
    ),
    ServicePreset(
        id="gym",
        label="Gym/Fitness",
        prompt=(
            "High-intensity motion graphics for a gym. Bold, aggressive "
            "typography pulsing to a beat. Dark aesthetic with neon blue "
            "highlights. 3D weights and fitness tracking UI elements flying "
            "through a smoke-filled digital gym environment. Professional "
            "sports edit style."
        ),
    ),
    ServicePreset(
        id="medical",
        label="Medical/Doc",
        prompt=(
            "Professional medical practice motion graphics. Clean blue and "
            "white medical icons floating in a serene 3D space. Smooth "
            "transitions showing a modern clinic interface. DNA helix "
            "abstract patterns, trust-building aesthetic, high-quality "
            "medical visualization."
        ),
    ),
    ServicePreset(
        id="ecommerce",
        label="E-commerce",
        prompt=(
            "Fast-paced e-commerce product showcase. Floating 3D shopping "
            "bags and 'Add to Cart' buttons with bouncy animations. Vibrant "
            "UI cards showing varied products. Bright lighting, clean "
            "shadows, professional consumer-brand motion style."
        ),
    ),
    ServicePreset(
        id="portfolio",
        label="Portfolio",
        prompt=(
            "Creative personal portfolio intro. Dynamic floating portraits "
            "and skill icons. Fluid liquid motion transitions. Minimalist "
            "typography, artistic professional lighting, modern design "
            "agency feel."
        ),
    ),
)


def get_preset(id: str) -> ServicePreset:
    for preset in SERVICE_PRESETS:
        if preset.id == id:
            return preset
    raise NotFoundError(f"Preset {id} not found")
