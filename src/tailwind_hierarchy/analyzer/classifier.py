"""Utility-class taxonomy: is a class token a styling utility, and can it
influence the components rendered inside the element that carries it?

Both predicates are pure and total. Anything that is not a non-empty string
classifies as neither utility nor contextual.
"""
import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple

# Arbitrary values like bg-[#123456], w-[100px], grid-cols-[1fr_2fr]
ARBITRARY_VALUE = re.compile(r'^[a-zA-Z-]+\[.+\]$')

_STATE_VARIANTS = (
    'hover|focus|focus-within|focus-visible|active|visited|target|first|last|only|odd|even|'
    'first-of-type|last-of-type|empty|disabled|enabled|checked|indeterminate|default|required|'
    'valid|invalid|in-range|out-of-range|placeholder-shown|autofill|read-only|open'
)

# Evaluated in order, first match wins. Categories overlap on purpose.
UTILITY_PATTERNS: List[Tuple[str, Pattern]] = [
    # Layout & Display
    ('display', re.compile(
        r'^(block|inline-block|inline|flex|inline-flex|table|inline-table|table-caption|table-cell|'
        r'table-column|table-column-group|table-footer-group|table-header-group|table-row-group|'
        r'table-row|flow-root|grid|inline-grid|contents|list-item|hidden)$')),
    ('layout', re.compile(r'^(container|isolate|isolation-auto|visible|invisible|collapse)$')),
    ('layout', re.compile(r'^(aspect|columns|box|float|clear|object|overflow|overscroll|box-decoration)-.+$')),

    # Positioning
    ('position', re.compile(r'^(static|fixed|absolute|relative|sticky)$')),
    ('inset', re.compile(r'^-?(top|right|bottom|left|inset|inset-x|inset-y|start|end)-.+$')),
    ('inset', re.compile(r'^(top|right|bottom|left|inset)$')),
    ('z-index', re.compile(r'^-?z-.+$')),

    # Flexbox & Grid
    ('flex-grid', re.compile(r'^(flex|grid)-.+$')),
    ('flex-grid', re.compile(r'^(grow|shrink)(-.+)?$')),
    ('flex-grid', re.compile(r'^(basis|auto-cols|auto-rows)-.+$')),
    ('alignment', re.compile(r'^(justify|items|content|self|place)-.+$')),
    ('flex-grid', re.compile(r'^-?order-.+$')),
    ('flex-grid', re.compile(r'^(col|row)-.+$')),
    ('flex-grid', re.compile(r'^gap-.+$')),

    # Spacing
    ('spacing', re.compile(r'^-?[pm][xytblrse]?-.+$')),
    ('spacing', re.compile(r'^-?space-[xy]-.+$')),
    ('spacing', re.compile(r'^space-[xy]-reverse$')),

    # Sizing
    ('sizing', re.compile(r'^(w|h|size|min-w|min-h|max-w|max-h)-.+$')),

    # Typography
    ('typography', re.compile(r'^font-.+$')),
    ('typography', re.compile(r'^text-.+$')),
    ('typography', re.compile(r'^(leading|tracking|break|whitespace|list|indent|align|line-clamp|decoration|underline-offset|hyphens)-.+$')),
    ('typography', re.compile(
        r'^(italic|not-italic|underline|overline|line-through|no-underline|uppercase|lowercase|'
        r'capitalize|normal-case|truncate|antialiased|subpixel-antialiased|ordinal|slashed-zero|'
        r'lining-nums|oldstyle-nums|proportional-nums|tabular-nums|diagonal-fractions|stacked-fractions|'
        r'normal-nums)$')),

    # Backgrounds & gradients
    ('background', re.compile(r'^bg-.+$')),
    ('background', re.compile(r'^(from|via|to)-.+$')),

    # Borders
    ('border', re.compile(r'^(border|rounded|outline|ring|divide)$')),
    ('border', re.compile(r'^(border|rounded|divide|outline|ring|ring-offset)-.+$')),

    # Effects
    ('effects', re.compile(r'^shadow$')),
    ('effects', re.compile(r'^(shadow|opacity|mix-blend|bg-blend)-.+$')),

    # Filters
    ('filters', re.compile(r'^(blur|filter|backdrop-filter|grayscale|invert|sepia|drop-shadow)$')),
    ('filters', re.compile(
        r'^-?(blur|brightness|contrast|drop-shadow|grayscale|hue-rotate|invert|saturate|sepia|'
        r'backdrop-blur|backdrop-brightness|backdrop-contrast|backdrop-grayscale|backdrop-hue-rotate|'
        r'backdrop-invert|backdrop-opacity|backdrop-saturate|backdrop-sepia)-.+$')),

    # Tables
    ('tables', re.compile(r'^(border-collapse|border-separate|table-auto|table-fixed)$')),

    # Transforms & Animation
    ('transforms', re.compile(r'^(transform|transform-gpu|transform-none|transition)$')),
    ('transforms', re.compile(r'^origin-.+$')),
    ('transforms', re.compile(r'^-?(scale|rotate|translate|skew)-.+$')),
    ('animation', re.compile(r'^(animate|transition|ease|duration|delay)-.+$')),

    # Interactivity
    ('interactivity', re.compile(
        r'^(appearance|cursor|pointer-events|resize|select|user-select|scroll|snap|touch|will-change|accent|caret)-.+$')),
    ('interactivity', re.compile(r'^(resize|snap-start|snap-end|snap-center)$')),

    # SVG
    ('svg', re.compile(r'^(fill|stroke)-.+$')),
    ('svg', re.compile(r'^(fill|stroke)$')),

    # Accessibility
    ('accessibility', re.compile(r'^(sr-only|not-sr-only)$')),

    # State variants (hover, focus, etc.)
    ('variant', re.compile(rf'^({_STATE_VARIANTS}):.+$')),
    # Responsive variants
    ('variant', re.compile(r'^(sm|md|lg|xl|2xl|max-sm|max-md|max-lg|max-xl|max-2xl):.+$')),
    # Dark mode, print, motion preference
    ('variant', re.compile(r'^dark:.+$')),
    ('variant', re.compile(r'^print:.+$')),
    ('variant', re.compile(r'^(motion-safe|motion-reduce):.+$')),

    # Field sizing (newer Tailwind)
    ('layout', re.compile(r'^field-sizing-.+$')),

    # Arbitrary properties like [color:red]
    ('arbitrary', re.compile(r'^\[.+:.+\]$')),

    # Data and aria attribute selectors
    ('variant', re.compile(r'^data-\[.+\]:.+$')),
    ('variant', re.compile(r'^aria-.+:.+$')),

    # Group and peer scoping
    ('variant', re.compile(r'^(group|peer)-.+$')),
    ('variant', re.compile(r'^(group|peer)(/\w+)?$')),

    # Pseudo-elements
    ('variant', re.compile(r'^(before|after|first-line|first-letter|selection|file|marker|placeholder|backdrop):.+$')),

    # Backdrop, placeholder
    ('filters', re.compile(r'^backdrop-.+$')),
    ('typography', re.compile(r'^placeholder-.+$')),
]

# Classes that create a context for, or are inherited by, nested components.
CONTEXTUAL_PATTERNS: List[Pattern] = [
    # Layout containers
    re.compile(r'^flex($|-.+)'),
    re.compile(r'^grid($|-.+)'),
    re.compile(r'^container$'),

    # Background colors
    re.compile(r'^bg-.+'),

    # Inherited text properties
    re.compile(
        r'^text-(inherit|current|transparent|black|white|slate-|gray-|zinc-|neutral-|stone-|red-|'
        r'orange-|amber-|yellow-|lime-|green-|emerald-|teal-|cyan-|sky-|blue-|indigo-|violet-|'
        r'purple-|fuchsia-|pink-|rose-)'),
    re.compile(r'^font-.+'),
    re.compile(r'^leading-.+'),
    re.compile(r'^tracking-.+'),
    re.compile(r'^text-(left|center|right|justify)$'),

    # Color scheme
    re.compile(r'^dark$'),

    # Position contexts
    re.compile(r'^(relative|absolute|fixed|sticky)$'),

    # Overflow, stacking
    re.compile(r'^overflow-.+'),
    re.compile(r'^z-.+'),

    # Transform context
    re.compile(r'^(transform|transform-gpu)$'),

    # Opacity and backdrop filters apply to the whole subtree
    re.compile(r'^opacity-.+'),
    re.compile(r'^backdrop-.+'),

    # Child placement inside flex/grid
    re.compile(r'^gap-.+'),
    re.compile(r'^justify-.+'),
    re.compile(r'^items-.+'),
    re.compile(r'^content-.+'),

    # Scoped variants are contextual by definition
    re.compile(r'^(group|peer)-.+'),
]

# Variant prefixes stripped before re-checking the base class
CONTEXTUAL_VARIANT = re.compile(r'^(sm|md|lg|xl|2xl|dark|hover|focus):(.+)$')


@dataclass(frozen=True)
class TokenClass:
    """Classification of a single class token."""
    token: str
    is_utility: bool
    is_contextual: bool
    category: str = ''


def utility_category(class_name) -> str:
    """Name of the first utility category matching the token, or '' if none."""
    if not isinstance(class_name, str):
        return ''

    class_name = class_name.strip()
    if not class_name:
        return ''

    if ARBITRARY_VALUE.match(class_name):
        return 'arbitrary'

    for category, pattern in UTILITY_PATTERNS:
        if pattern.match(class_name):
            return category
    return ''


def is_utility_token(class_name) -> bool:
    """True if the token is a recognized styling utility class."""
    return bool(utility_category(class_name))


def is_contextual_token(class_name) -> bool:
    """True if the token can visually influence descendant components.

    Variant-prefixed classes (``md:flex``, ``dark:bg-black``) are contextual
    when their base class is; unknown prefixes never are.
    """
    if not isinstance(class_name, str):
        return False

    class_name = class_name.strip()
    if not class_name:
        return False

    variant = CONTEXTUAL_VARIANT.match(class_name)
    if variant:
        return is_contextual_token(variant.group(2))

    return any(pattern.match(class_name) for pattern in CONTEXTUAL_PATTERNS)


def classify_token(class_name) -> TokenClass:
    """Classify a token along both axes at once."""
    category = utility_category(class_name)
    return TokenClass(
        token=class_name if isinstance(class_name, str) else repr(class_name),
        is_utility=bool(category),
        is_contextual=is_contextual_token(class_name),
        category=category,
    )
