# src/fallback/catalog.py — v1
"""Static knowledge tables used by the fallback engines.

- SMART_DEFAULTS: recommended design bundle per project type.
- KEYWORD_MAPPINGS: keywords that hint at a project type, design style or
  colour theme in a free-text description.
- COMPATIBLE_THEMES / COMPATIBLE_ANIMATIONS / COMPATIBLE_BACKGROUNDS: options
  that pair well with a given design style or colour theme.
"""

from __future__ import annotations

from aigate.core.selection import Typography
from aigate.fallback.models import SmartDefaults


def _typography(
    font: str = "'Inter', sans-serif",
    heading_weight: str = "Semibold",
    heading_size: str = "Medium",
    line_height: str = "Normal",
) -> Typography:
    return Typography(
        font_family=font,
        heading_weight=heading_weight,
        body_weight="Regular",
        text_alignment="Left",
        heading_size=heading_size,
        body_size="Medium",
        line_height=line_height,
    )


SMART_DEFAULTS: dict[str, SmartDefaults] = {
    "Portfolio": SmartDefaults(
        layout="single-column",
        design_style="minimalist",
        color_theme="minimal-beige",
        typography=_typography(heading_size="Large"),
        functionality=["basic-package"],
        background="aurora",
        components=["carousel", "bento-grid", "animated-testimonials"],
        animations=["fade-in", "slide-in", "scroll-reveal"],
    ),
    "E-commerce": SmartDefaults(
        layout="grid-layout",
        design_style="material-design",
        color_theme="material-blue",
        typography=_typography(
            font="'Roboto', sans-serif", heading_weight="Bold", heading_size="Large",
        ),
        functionality=["advanced-package"],
        background="gradient-mesh",
        components=["carousel", "card", "hover-card", "animated-modal", "shimmer-button"],
        animations=["hover-lift", "scale-in", "loading-spinner"],
    ),
    "Dashboard": SmartDefaults(
        layout="sidebar-layout",
        design_style="fluent-design",
        color_theme="fluent-azure",
        typography=_typography(),
        functionality=["advanced-package"],
        background="subtle-grid",
        components=["sidebar", "tabs", "bento-grid", "timeline", "animated-list"],
        animations=["fade-in", "stagger-children", "skeleton-loader"],
    ),
    "Web App": SmartDefaults(
        layout="app-layout",
        design_style="glassmorphism",
        color_theme="frosted-blue",
        typography=_typography(),
        functionality=["advanced-package"],
        background="animated-gradient",
        components=["navbar-menu", "tabs", "animated-modal", "animated-tooltip", "card"],
        animations=["fade-in", "slide-in", "page-transition", "loading-spinner"],
    ),
    "Mobile App": SmartDefaults(
        layout="mobile-first",
        design_style="apple-hig",
        color_theme="apple-sky",
        typography=_typography(line_height="Relaxed"),
        functionality=["advanced-package"],
        background="solid-color",
        components=["card-stack", "tabs", "animated-list", "shimmer-button"],
        animations=["slide-in", "bounce-in", "swipe-gestures"],
    ),
    "Website": SmartDefaults(
        layout="single-column",
        design_style="material-design",
        color_theme="ocean-breeze",
        typography=_typography(heading_size="Large"),
        functionality=["standard-package"],
        background="background-gradient",
        components=["carousel", "accordion", "card", "animated-testimonials"],
        animations=["fade-in", "scroll-reveal", "hover-lift"],
    ),
}


# Dict order matters: on equal match counts the first entry wins.
KEYWORD_MAPPINGS: dict[str, dict[str, list[str]]] = {
    "project_types": {
        "Portfolio": [
            "portfolio", "showcase", "personal site", "personal website",
            "work samples", "projects", "creative work", "my work",
            "professional profile", "resume site", "cv site", "freelancer",
            "designer portfolio", "developer portfolio",
        ],
        "E-commerce": [
            "shop", "store", "sell", "products", "ecommerce", "e-commerce",
            "online store", "marketplace", "shopping", "buy", "purchase", "cart",
            "checkout", "payment", "retail", "merchant", "vendor",
        ],
        "Dashboard": [
            "dashboard", "admin", "analytics", "metrics", "data visualization",
            "statistics", "reporting", "insights", "kpi", "monitoring",
            "control panel", "admin panel", "management", "backend",
            "data analysis",
        ],
        "Web App": [
            "app", "application", "platform", "tool", "software", "saas",
            "service", "system", "web application", "interactive",
            "productivity", "utility", "webapp", "web tool",
        ],
        "Mobile App": [
            "mobile", "ios", "android", "phone", "tablet", "mobile app",
            "mobile application", "smartphone", "mobile-first", "touch",
            "responsive mobile", "native", "hybrid app",
        ],
        "Website": [
            "website", "site", "web", "landing page", "homepage", "web page",
            "online presence", "company site", "business site", "informational",
            "static site", "marketing site",
        ],
    },
    "design_styles": {
        "material-design": [
            "material", "material design", "google design", "android style",
            "elevation", "paper", "cards", "floating action", "ripple",
            "material ui",
        ],
        "fluent-design": [
            "fluent", "fluent design", "microsoft", "windows", "acrylic",
            "reveal", "depth", "light", "modern windows",
        ],
        "apple-hig": [
            "apple", "ios", "macos", "human interface", "hig", "cupertino",
            "san francisco", "clarity", "deference", "apple style",
        ],
        "minimalist": [
            "minimal", "minimalist", "clean", "simple", "modern", "sleek",
            "uncluttered", "basic", "essential", "stripped down", "less is more",
            "white space", "spacious", "zen",
        ],
        "neumorphism": [
            "neumorphism", "soft ui", "neomorphism", "tactile", "embossed",
            "extruded", "soft shadows", "subtle depth",
        ],
        "glassmorphism": [
            "glass", "glassmorphism", "frosted", "blur", "translucent",
            "transparent", "frosted glass", "backdrop blur", "glassy",
            "see-through",
        ],
        "digital-brutalism": [
            "brutalism", "brutalist", "bold", "raw", "edgy", "unconventional",
            "stark", "harsh", "industrial", "concrete", "rough", "anti-design",
        ],
        "organic-design": [
            "organic", "natural", "flowing", "curved", "biomorphic", "fluid",
            "soft shapes", "nature-inspired", "rounded", "smooth",
        ],
        "retro-futurism": [
            "retro", "futurism", "retro futurism", "vintage", "80s", "90s",
            "neon", "cyberpunk", "synthwave", "vaporwave", "nostalgic",
            "old school",
        ],
    },
    "color_themes": {
        "ocean-breeze": [
            "blue", "ocean", "sea", "water", "calm", "aqua", "teal", "cyan",
            "turquoise", "marine", "coastal", "sky blue", "azure",
        ],
        "sunset-warmth": [
            "orange", "warm", "sunset", "vibrant", "red", "yellow", "amber",
            "gold", "fire", "autumn", "energetic", "hot",
        ],
        "forest-green": [
            "green", "forest", "nature", "earth", "natural", "eco", "organic",
            "leaf", "plant", "environmental", "sustainable", "fresh",
        ],
        "royal-purple": [
            "purple", "violet", "royal", "elegant", "luxury", "lavender", "plum",
            "mauve", "sophisticated", "regal", "premium",
        ],
        "monochrome-modern": [
            "black", "white", "gray", "grey", "monochrome", "neutral",
            "grayscale", "minimal color", "achromatic", "black and white",
            "sophisticated", "timeless",
        ],
        "tech-neon": [
            "neon", "bright", "electric", "cyber", "futuristic", "glow",
            "fluorescent", "vibrant", "tech", "digital", "modern tech",
            "high tech",
        ],
    },
}


COMPATIBLE_THEMES: dict[str, list[str]] = {
    "minimalist": ["monochrome-modern", "minimal-beige", "pure-contrast", "apple-graphite", "ocean-breeze"],
    "glassmorphism": ["frosted-blue", "aurora-glass", "tech-neon", "ocean-breeze", "sunset-warmth"],
    "material-design": ["material-blue", "material-red", "ocean-breeze", "forest-green", "royal-purple"],
    "fluent-design": ["fluent-azure", "fluent-orchid", "ocean-breeze", "monochrome-modern", "tech-neon"],
    "apple-hig": ["apple-sky", "apple-graphite", "monochrome-modern", "ocean-breeze", "minimal-beige"],
    "neumorphism": ["soft-gray", "cream-shadow", "monochrome-modern", "sunset-warmth", "minimal-beige"],
    "digital-brutalism": ["brutal-contrast", "cyber-yellow", "tech-neon", "royal-purple", "neon-nights"],
    "organic-design": ["forest-green", "earth-tones", "botanical-sage", "sunset-warmth", "ocean-breeze"],
    "retro-futurism": ["retro-sunset", "neon-nights", "space-age", "tech-neon", "royal-purple"],
}

COMPATIBLE_ANIMATIONS: dict[str, list[str]] = {
    "minimalist": ["fade-in-text", "text-reveal", "word-fade-in", "blur-in", "fade-in"],
    "glassmorphism": ["blur-in", "fade-in", "text-shimmer", "sparkles", "wavy-text"],
    "modern-corporate": ["fade-in-text", "text-reveal", "word-fade-in", "blur-in", "fade-in"],
    "digital-brutalism": ["text-shimmer", "sparkles", "wavy-text", "flip-text", "typing-animation"],
    "material-design": ["fade-in", "blur-in", "text-reveal", "word-fade-in", "fade-in-text"],
    "fluent-design": ["blur-in", "fade-in", "text-shimmer", "fade-in-text", "text-reveal"],
    "apple-hig": ["fade-in", "blur-in", "text-reveal", "fade-in-text", "word-fade-in"],
    "neumorphism": ["fade-in", "blur-in", "text-reveal", "fade-in-text", "word-fade-in"],
    "organic-design": ["wavy-text", "fade-in", "blur-in", "sparkles", "text-shimmer"],
    "retro-futurism": ["text-shimmer", "sparkles", "typing-animation", "flip-text", "wavy-text"],
}

COMPATIBLE_BACKGROUNDS: dict[str, list[str]] = {
    "material-blue": ["dot-pattern", "grid-pattern", "animated-grid-pattern", "waves", "ripple", "particles"],
    "material-red": ["dot-pattern", "grid-pattern", "animated-grid-pattern", "particles", "sparkles", "beams"],
    "fluent-azure": ["aurora", "dot-pattern", "grid-pattern", "waves", "ripple", "beams"],
    "fluent-orchid": ["aurora", "background-gradient", "sparkles", "particles", "meteors", "shooting-stars"],
    "apple-sky": ["dot-pattern", "grid-pattern", "waves", "ripple", "particles", "beams"],
    "apple-graphite": ["dot-pattern", "grid-pattern", "animated-grid-pattern", "retro-grid", "spotlight", "beams"],
    "monochrome-modern": ["dot-pattern", "grid-pattern", "animated-grid-pattern", "retro-grid", "spotlight", "beams"],
    "minimal-beige": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "spotlight"],
    "pure-contrast": ["dot-pattern", "grid-pattern", "animated-grid-pattern", "retro-grid", "beams", "spotlight"],
    "soft-gray": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "spotlight"],
    "cream-shadow": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "background-gradient"],
    "frosted-blue": ["aurora", "dot-pattern", "grid-pattern", "waves", "ripple", "particles"],
    "aurora-glass": ["aurora", "background-gradient", "sparkles", "particles", "meteors", "shooting-stars"],
    "brutal-contrast": ["retro-grid", "animated-grid-pattern", "grid-pattern", "dot-pattern", "beams", "spotlight"],
    "cyber-yellow": ["retro-grid", "animated-grid-pattern", "grid-pattern", "meteors", "shooting-stars", "beams"],
    "tech-neon": ["aurora", "animated-grid-pattern", "grid-pattern", "retro-grid", "meteors", "shooting-stars"],
    "forest-green": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "aurora"],
    "earth-tones": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "background-gradient"],
    "botanical-sage": ["dot-pattern", "grid-pattern", "particles", "waves", "ripple", "aurora"],
    "ocean-breeze": ["aurora", "dot-pattern", "grid-pattern", "ripple", "waves", "particles"],
    "retro-sunset": ["aurora", "background-gradient", "retro-grid", "sparkles", "meteors", "shooting-stars"],
    "neon-nights": ["aurora", "retro-grid", "animated-grid-pattern", "meteors", "shooting-stars", "beams"],
    "space-age": ["retro-grid", "animated-grid-pattern", "grid-pattern", "meteors", "shooting-stars", "aurora"],
    "sunset-warmth": ["aurora", "background-gradient", "animated-grid-pattern", "particles", "sparkles", "shooting-stars"],
    "royal-purple": ["aurora", "background-gradient", "animated-grid-pattern", "sparkles", "meteors", "shooting-stars"],
    "coral-reef": ["aurora", "background-gradient", "particles", "waves", "ripple", "sparkles"],
    "midnight-blue": ["aurora", "dot-pattern", "grid-pattern", "waves", "ripple", "beams"],
}


def compatible_themes(design_style: str | None) -> list[str]:
    return list(COMPATIBLE_THEMES.get(design_style or "", []))


def compatible_animations(design_style: str | None) -> list[str]:
    return list(COMPATIBLE_ANIMATIONS.get(design_style or "", []))


def compatible_backgrounds(color_theme: str | None) -> list[str]:
    return list(COMPATIBLE_BACKGROUNDS.get(color_theme or "", []))
