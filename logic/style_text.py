"""Canned descriptive text for scored combinations.

Every phrase is looked up by label; nothing here is generated. The tables
are keyed by harmony label, occasion, preferred clothing type and color
preference, each with a generic fallback.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from models.taxonomy import normalize_clothing_type, normalize_color_preference, normalize_occasion

HARMONY_PHRASES: Dict[str, str] = {
    "complementary": "Opposite hues create a striking, balanced contrast",
    "analogous": "Neighbouring hues blend into a calm, cohesive palette",
    "triadic": "Well-spaced hues keep the look lively without clashing",
    "monochrome": "A single color family gives a clean, unified silhouette",
    "diverse": "A wide spread of hues makes a bold, eclectic statement",
}
GENERIC_HARMONY_PHRASE = "Well-coordinated colors create visual harmony"

OCCASION_PHRASES: Dict[str, str] = {
    "casual": "relaxed enough for everyday activities and weekend outings",
    "formal": "sophisticated enough for formal events",
    "party": "eye-catching in social settings and celebrations",
    "business": "polished for meetings and corporate environments",
    "sports": "practical and comfortable for active pursuits",
    "wedding": "elegant and appropriate for special celebrations",
}
GENERIC_OCCASION_PHRASE = "stylish for your selected occasion"

CLOTHING_TYPE_CLAUSES: Dict[str, str] = {
    "shirt": "Classic shirt styling adds sophistication",
    "t-shirt": "A casual t-shirt keeps the look relaxed and comfortable",
    "pants": "Well-fitted pants create a polished silhouette",
    "jeans": "Denim adds a casual, versatile element",
    "dress": "A dress creates an instantly put-together appearance",
    "skirt": "A skirt adds flair and movement",
    "jacket": "A layering piece adds structure and refinement",
    "sweater": "A cozy sweater brings warmth and texture",
}

COLOR_PREFERENCE_PHRASES: Dict[str, str] = {
    "bright": "Vibrant tones suit your preference for bright colors",
    "dark": "Deep tones suit your preference for dark colors",
    "neutral": "Subtle tones suit your preference for neutral colors",
    "pastel": "Soft tones suit your preference for pastel colors",
}

HARMONY_ANALYSIS: Dict[str, str] = {
    "complementary": "Complementary color scheme detected",
    "analogous": "Analogous palette of neighbouring hues",
    "triadic": "Triadic spread across the color wheel",
    "monochrome": "Monochromatic styling",
    "diverse": "Diverse palette with bold contrast",
}

OCCASION_RECOMMENDATIONS: Dict[str, str] = {
    "casual": "pair with clean sneakers and minimal accessories",
    "formal": "finish with polished shoes and understated jewellery",
    "party": "add a statement accessory to stand out",
    "business": "keep accessories classic and tailored",
    "sports": "choose breathable layers and supportive footwear",
    "wedding": "coordinate accessories with the event's palette",
}
GENERIC_RECOMMENDATION = "accessorise to suit the setting"


def _confidence_prefix(score: int) -> str:
    if score >= 85:
        return "Highly recommended"
    if score >= 75:
        return "Recommended"
    return "Worth trying"


def style_notes(harmony: str, occasion: Optional[str], clothing_type: Optional[str] = None) -> str:
    """Concatenate the harmony phrase, occasion phrase and an optional type clause."""

    harmony_phrase = HARMONY_PHRASES.get(harmony, GENERIC_HARMONY_PHRASE)
    occasion_phrase = OCCASION_PHRASES.get(normalize_occasion(occasion), GENERIC_OCCASION_PHRASE)
    note = f"{harmony_phrase}, {occasion_phrase}."
    type_key = normalize_clothing_type(clothing_type)
    if type_key:
        note += f" {CLOTHING_TYPE_CLAUSES[type_key]}."
    return note


def color_analysis(
    harmony: str, color_preference: Optional[str] = None, color_names: Iterable[str] = ()
) -> str:
    analysis = HARMONY_ANALYSIS.get(harmony, GENERIC_HARMONY_PHRASE)
    names = list(dict.fromkeys(color_names))
    if names:
        analysis += f" ({', '.join(names)})"
    analysis += "."
    preference = normalize_color_preference(color_preference)
    if preference:
        analysis += f" {COLOR_PREFERENCE_PHRASES[preference]}."
    return analysis


def recommendation(occasion: Optional[str], score: int) -> str:
    tip = OCCASION_RECOMMENDATIONS.get(normalize_occasion(occasion), GENERIC_RECOMMENDATION)
    return f"{_confidence_prefix(score)}: {tip}."


__all__ = ["style_notes", "color_analysis", "recommendation"]
