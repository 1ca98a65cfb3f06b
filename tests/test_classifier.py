"""Tests for the utility / contextual class taxonomy."""
import pytest

from tailwind_hierarchy.analyzer.classifier import (
    classify_token,
    is_contextual_token,
    is_utility_token,
    utility_category,
)


class TestUtilityTokens:
    """is_utility_token recognizes the utility taxonomy."""

    @pytest.mark.parametrize('token', [
        'flex', 'hidden', 'grid', 'relative', 'absolute', 'top-0', 'inset-x-0', 'z-10',
        'flex-col', 'items-center', 'justify-between', 'gap-4', 'p-4', 'px-2', 'mt-8',
        '-mt-2', 'w-full', 'h-screen', 'max-w-md', 'font-bold', 'text-sm', 'text-white',
        'leading-tight', 'tracking-wide', 'bg-blue-500', 'border', 'border-gray-200',
        'rounded-lg', 'shadow', 'shadow-md', 'opacity-50', 'blur-sm', 'transform',
        'rotate-45', 'transition-colors', 'duration-200', 'cursor-pointer', 'fill-current',
        'sr-only', 'container', 'truncate', 'uppercase', 'space-y-2',
    ])
    def test_plain_utilities(self, token):
        assert is_utility_token(token)

    @pytest.mark.parametrize('token', [
        'hover:bg-blue-600', 'focus:ring-2', 'md:flex', '2xl:grid-cols-4', 'dark:bg-gray-900',
        'print:hidden', 'motion-safe:animate-spin', 'group-hover:text-white', 'peer-checked:block',
        'before:content-none', 'data-[state=open]:block', 'aria-expanded:rotate-180',
        '[mask-type:luminance]', 'group', 'group/item',
    ])
    def test_variant_forms(self, token):
        assert is_utility_token(token)

    @pytest.mark.parametrize('token', ['bg-[#1da1f2]', 'w-[100px]', 'grid-cols-[1fr_2fr]'])
    def test_arbitrary_values(self, token):
        assert is_utility_token(token)
        assert utility_category(token) == 'arbitrary'

    def test_surrounding_whitespace_is_ignored(self):
        assert is_utility_token('  flex  ')

    @pytest.mark.parametrize('token', ['', '   ', 'card', 'Button', 'my_widget', '{', 'foo:bar'])
    def test_unrecognized_strings(self, token):
        assert not is_utility_token(token)

    @pytest.mark.parametrize('value', [None, 42, ['flex'], b'flex'])
    def test_non_strings_never_raise(self, value):
        assert is_utility_token(value) is False
        assert is_contextual_token(value) is False


class TestContextualTokens:
    """is_contextual_token recognizes classes that affect descendants."""

    @pytest.mark.parametrize('token', [
        'flex', 'flex-col', 'grid', 'grid-cols-3', 'container', 'bg-gray-100', 'text-white',
        'text-gray-700', 'text-center', 'font-sans', 'leading-6', 'tracking-tight', 'dark',
        'relative', 'absolute', 'fixed', 'sticky', 'overflow-hidden', 'z-50', 'transform',
        'transform-gpu', 'opacity-75', 'backdrop-blur', 'gap-2', 'justify-center',
        'items-start', 'content-between', 'group-hover:flex', 'peer-focus:block',
    ])
    def test_contextual(self, token):
        assert is_contextual_token(token)

    @pytest.mark.parametrize('token', [
        'p-4', 'm-2', 'w-full', 'h-8', 'border', 'rounded', 'shadow-lg', 'text-sm',
        'hidden', 'block', 'static', 'cursor-pointer', '',
    ])
    def test_not_contextual(self, token):
        assert not is_contextual_token(token)

    @pytest.mark.parametrize('token', ['md:flex', 'lg:grid-cols-2', 'dark:bg-gray-800',
                                       'hover:bg-blue-600', 'focus:text-white', 'sm:md:flex'])
    def test_known_prefixes_recurse_on_base(self, token):
        assert is_contextual_token(token)

    @pytest.mark.parametrize('token', ['md:p-4', 'dark:border', 'hover:underline'])
    def test_known_prefix_with_plain_base(self, token):
        assert not is_contextual_token(token)

    @pytest.mark.parametrize('token', ['active:flex', 'print:bg-white', 'motion-safe:relative'])
    def test_unknown_prefix_is_not_contextual(self, token):
        assert not is_contextual_token(token)

    @pytest.mark.parametrize('token', ['flex', 'grid', 'bg-gray-100', 'text-white', 'font-bold',
                                       'leading-6', 'tracking-wide', 'relative', 'z-10',
                                       'overflow-auto', 'opacity-50', 'gap-4', 'justify-end'])
    def test_unprefixed_contextual_tokens_are_utilities(self, token):
        assert is_contextual_token(token)
        assert is_utility_token(token)


class TestClassifyToken:
    def test_reports_both_axes(self):
        result = classify_token('bg-gray-100')
        assert result.is_utility
        assert result.is_contextual
        assert result.category == 'background'

    def test_surrounding_whitespace_on_both_axes(self):
        result = classify_token(' flex ')
        assert result.is_utility
        assert result.is_contextual
        assert is_contextual_token('\tmd:grid\n')
        assert not is_contextual_token('   ')

    def test_non_utility(self):
        result = classify_token('card')
        assert not result.is_utility
        assert not result.is_contextual
        assert result.category == ''
