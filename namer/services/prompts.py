"""
Prompt templates and response schemas for the identity backend.

Everything backend-specific lives here as data so the adapter itself has a
single code path: identity modes ("domain" / "username") select a prompt
and a preview style, analysis modes ("search" / "schema") select how JSON
is requested.
"""

from enum import Enum

TLDS_TO_CHECK = [".com", ".io", ".ai", ".co", ".app"]
SOCIAL_PLATFORMS = ["twitter.com", "instagram.com", "tiktok.com", "facebook.com"]


class Category(str, Enum):
    COMMERCE = "Commerce"
    GAMING = "Gaming"
    TECH = "Tech"
    CREATIVE = "Creative"
    PERSONAL = "Personal"
    OTHER = "Other"


CATEGORY_NAMES = ", ".join(f"'{c.value}'" for c in Category)


def parse_category(category: str) -> Category:
    """Case-insensitive lookup. Unknown / empty → Category.OTHER."""
    wanted = (category or "").strip().lower()
    for c in Category:
        if c.value.lower() == wanted:
            return c
    return Category.OTHER


# ── Identity generation ──────────────────────────────────────────────

_DOMAIN_PROMPT = """
You are a domain name and branding expert.
The user wants to launch a website for: "{description}".

Generate {count} unique, high-value domain names complete with extensions (TLDs).

Rules:
1. Analyze the intent:
   - Selling/Shop -> Use .shop, .store, .com, .co
   - Tech/SaaS -> Use .io, .ai, .app, .dev
   - Creative/Portfolio -> Use .studio, .design, .me
   - General -> Use .com, .net, .org
2. The 'handle' MUST include the extension (e.g., 'UrbanFlow.shop', 'CodeStream.io').
3. Be creative. Avoid generic names. Use compounding, blending, or evocative words.

For each idea, classify it into a category:
{categories}.

For each, provide:
- handle (The full domain with extension)
- style (e.g., "Modern Retail", "SaaS", "Minimalist")
- category (The strict category from above)
- explanation (One short sentence on why this domain works for the brand)
- vibe (The brand personality)
- availabilityScore (1-10)
"""

_USERNAME_PROMPT = """
You are an expert at naming online identities for gamers, streamers and creators.
The user describes themselves as: "{description}".

Generate {count} unique usernames that work across social platforms.

Rules:
1. No spaces. Letters, digits, underscores and dots only.
2. Do NOT include a leading '@' or a domain extension.
3. Mix styles: punchy, playful, professional, edgy.
4. Avoid names that are obviously already taken (single common words, celebrity names).

For each idea, classify it into a category:
{categories}.

For each, provide:
- handle (The username)
- style (e.g., "Minimal", "Gamer", "Professional")
- category (The strict category from above)
- explanation (One short sentence on why this name fits)
- vibe (The personality)
- availabilityScore (1-10, how likely the name is still unclaimed)
"""

IDENTITY_PROMPTS = {
    "domain": _DOMAIN_PROMPT,
    "username": _USERNAME_PROMPT,
}

IDENTITY_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "handle": {"type": "STRING", "description": "The full name or domain (e.g. 'PixelMarket.shop')"},
            "style": {"type": "STRING", "description": "The brand style"},
            "category": {"type": "STRING", "description": f"Category: {', '.join(c.value for c in Category)}"},
            "explanation": {"type": "STRING", "description": "Why this name works"},
            "vibe": {"type": "STRING", "description": "The personality"},
            "availabilityScore": {"type": "INTEGER", "description": "Uniqueness score 1-10"},
        },
        "required": ["handle", "style", "category", "explanation", "vibe", "availabilityScore"],
    },
}


def build_identity_prompt(description: str, count: int, mode: str = "domain") -> str:
    template = IDENTITY_PROMPTS.get(mode, _DOMAIN_PROMPT)
    return template.format(description=description, count=count, categories=CATEGORY_NAMES)


# ── Availability analysis ────────────────────────────────────────────

def bare_name(handle: str) -> str:
    """'urbanflow.shop' → 'urbanflow'. Leading '@' is dropped."""
    return handle.strip().lstrip("@").split(".")[0]


def build_search_query(handle: str) -> str:
    name = bare_name(handle)
    terms = [f"site:{handle}"]
    terms += [f"site:{name}{tld}" for tld in TLDS_TO_CHECK]
    terms += [f"site:{p}/{name}" for p in SOCIAL_PLATFORMS]
    return " OR ".join(terms)


_JSON_SHAPE_HINT = """
CRITICAL: Return ONLY a valid JSON object. Do not include markdown formatting like ```json.
Structure:
{{
  "socialsFound": ["Twitter", "Instagram"],
  "tldStatus": {{
{tld_lines}
  }},
  "summary": "Brief text summary.",
  "websiteTitle": "Title if found or N/A",
  "websiteDescription": "Description if found or N/A"
}}
"""


def build_analysis_prompt(handle: str, mode: str = "search") -> str:
    name = bare_name(handle)
    questions = [f"Is {name}{tld} taken{' (active website)' if tld == '.com' else ''}?" for tld in TLDS_TO_CHECK]
    questions.append(f'Are there existing social media profiles for "{name}"?')
    numbered = "\n".join(f"{i}. {q}" for i, q in enumerate(questions, start=1))

    prompt = f"""
Perform a comprehensive availability check for the brand name "{name}" and the specific domain "{handle}".

Google Search Query used:
{build_search_query(handle)}

Analyze the search results to determine:
{numbered}

If a website is found, extract its title and a brief description.
"""
    if mode == "schema":
        return prompt + "\nReturn a JSON object.\n"

    tld_lines = ",\n".join(
        f'    "{tld}": "AVAILABLE" | "TAKEN" | "UNKNOWN"' for tld in TLDS_TO_CHECK
    )
    return prompt + _JSON_SHAPE_HINT.format(tld_lines=tld_lines)


_TLD_ENUM = {"type": "STRING", "enum": ["AVAILABLE", "TAKEN", "UNKNOWN"]}

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "socialsFound": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of social platforms where the name is found (e.g. ['Twitter', 'Instagram'])",
        },
        "tldStatus": {
            "type": "OBJECT",
            "properties": {tld: dict(_TLD_ENUM) for tld in TLDS_TO_CHECK},
            "required": list(TLDS_TO_CHECK),
        },
        "summary": {"type": "STRING", "description": "A brief text summary of the availability."},
        "websiteTitle": {"type": "STRING", "description": "Title of the main conflicting website if found, else N/A"},
        "websiteDescription": {"type": "STRING", "description": "Description of the main conflicting website if found, else N/A"},
    },
    "required": ["socialsFound", "tldStatus", "summary"],
}


# ── Previews ─────────────────────────────────────────────────────────

WEBSITE_PRESETS = {
    Category.COMMERCE: "Modern E-commerce website homepage mockup, displaying trendy products, 'Shop Now' button, clean UI, bright and inviting.",
    Category.GAMING: "Esports team website landing page, dark mode, neon accents, roster showcase, aggressive typography.",
    Category.TECH: "SaaS startup landing page hero section, isometric 3D illustrations, dashboard preview, blue and white color scheme, modern.",
    Category.CREATIVE: "Design portfolio website header, bold typography, masonry grid layout of art, minimalist, artistic.",
    Category.PERSONAL: "Personal brand website, professional headshot placeholder, biography text, clean serif fonts, elegant.",
    Category.OTHER: "Professional small business website landing page, hero image, clear value proposition, modern web design.",
}

AVATAR_PRESETS = {
    Category.COMMERCE: "Friendly shop mascot, flat vector, bold brand colours.",
    Category.GAMING: "Esports mascot logo, aggressive lines, neon rim lighting, dark background.",
    Category.TECH: "Geometric abstract mark, isometric, blue gradients, clean.",
    Category.CREATIVE: "Hand-drawn illustrated character, painterly texture, vibrant palette.",
    Category.PERSONAL: "Stylised portrait silhouette, soft pastel background, warm and approachable.",
    Category.OTHER: "Minimal emblem, centred composition, soft gradient background.",
}


def build_avatar_prompt(handle: str, vibe: str, category: str, mode: str = "domain") -> str:
    preset = parse_category(category)
    if mode == "username":
        return (
            f'Profile avatar for an online creator named "{handle}".\n'
            f"Category: {preset.value}.\n"
            f"Visual Context: {AVATAR_PRESETS[preset]}\n"
            f"Vibe: {vibe}.\n"
            "Style: Circular-crop friendly, centred subject, no text, high resolution."
        )
    return (
        f'High-fidelity website UI design mockup for a brand named "{handle}".\n'
        f"Category: {preset.value}.\n"
        f"Visual Context: {WEBSITE_PRESETS[preset]}\n"
        f"Vibe: {vibe}.\n"
        "Style: Professional web design, Dribbble trending, high resolution, photorealistic UI.\n"
        "The image should look like a screenshot of a browser window showing the website."
    )


def avatar_aspect_ratio(mode: str = "domain") -> str:
    return "1:1" if mode == "username" else "16:9"
