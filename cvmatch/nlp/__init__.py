"""
Document-to-candidate pipeline for cvmatch.

Main Components:
- ExtractionPipeline: Runs extraction adapters and picks the best text
- TextCleaner: Text normalisation shared by every adapter
- AttributeExtractor: Candidate fields and confidence from text
- ContactParser, ExperienceParser, SkillsParser: Field heuristics
- normalise_external_profile: Flattening of external parser responses
"""

from .preprocessor import TextCleaner, clean_text, split_lines

from .extractors import (
    ExtractionAdapter,
    ExtractionOutcome,
    ExtractionPipeline,
    ExtractionResult,
    OpticalCharacterAdapter,
    PlainTextAdapter,
    StructuredDocumentAdapter,
    UniversalFallbackAdapter,
    WordProcessorAdapter,
    build_default_adapters,
    get_extraction_pipeline,
)

from .parsers import (
    ContactInfo,
    ContactParser,
    ExperienceParser,
    SkillsParser,
    SkillsParseResult,
)

from .attribute_extractor import AttributeExtractor, get_attribute_extractor

from .external_profile import (
    fallback_phone,
    normalise_external_profile,
    pick_most_recent_role,
)

__all__ = [
    # Preprocessor
    "TextCleaner",
    "clean_text",
    "split_lines",
    # Extraction
    "ExtractionAdapter",
    "ExtractionOutcome",
    "ExtractionPipeline",
    "ExtractionResult",
    "OpticalCharacterAdapter",
    "PlainTextAdapter",
    "StructuredDocumentAdapter",
    "UniversalFallbackAdapter",
    "WordProcessorAdapter",
    "build_default_adapters",
    "get_extraction_pipeline",
    # Parsers
    "ContactInfo",
    "ContactParser",
    "ExperienceParser",
    "SkillsParser",
    "SkillsParseResult",
    # Attributes
    "AttributeExtractor",
    "get_attribute_extractor",
    # External parser
    "fallback_phone",
    "normalise_external_profile",
    "pick_most_recent_role",
]
