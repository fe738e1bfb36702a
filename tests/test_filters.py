"""Tests for filter compilation."""

import os
from types import SimpleNamespace

import pytest

from readdirp import InvalidFilterError, compile_filter
from readdirp._common.filters import compile_glob


NAMES = ['a.js', 'b.txt', 'c.js', 'd.js', 'e.rb']


def make_entry(path: str) -> SimpleNamespace:
    return SimpleNamespace(basename=os.path.basename(path), path=path)


def accepted(predicate, names=NAMES):
    return [name for name in names if predicate(make_entry(name))]


class TestCompileGlob:
    """Single-pattern matching semantics."""

    def test_star_matches_within_segment(self):
        match = compile_glob('*.js')
        assert match('a.js')
        assert not match('a.txt')

    def test_star_does_not_cross_separator(self):
        assert not compile_glob('*.js')('sub/a.js')
        assert compile_glob('sub/*.js')('sub/a.js')
        assert not compile_glob('sub/*.js')('a.js')

    def test_wildcards_skip_dotfiles(self):
        assert not compile_glob('*')('.git')
        assert not compile_glob('?git')('.git')
        assert compile_glob('.*')('.git')
        assert compile_glob('.git')('.git')

    def test_case_sensitive(self):
        assert not compile_glob('*.JS')('a.js')

    def test_question_mark_and_character_class(self):
        match = compile_glob('[ab].?s')
        assert match('a.js')
        assert match('b.ts')
        assert not match('c.js')

    def test_double_star_stays_in_one_segment(self):
        assert compile_glob('**')('a.js')
        assert compile_glob('**/*.js')('a/c.js')
        assert not compile_glob('**/*.js')('a/b/c.js')


class TestCompileFilter:
    """Filter spec shapes and composition rules."""

    def test_none_accepts_everything(self):
        assert accepted(compile_filter(None)) == NAMES

    def test_callable_returned_unchanged(self):
        def only_js(entry):
            return entry.basename.endswith('.js')

        assert compile_filter(only_js, 'basename') is only_js

    def test_glob_string_is_trimmed(self):
        assert accepted(compile_filter('  *.js ')) == ['a.js', 'c.js', 'd.js']

    def test_single_item_list(self):
        assert accepted(compile_filter(['*.txt'])) == ['b.txt']

    def test_list_items_are_trimmed(self):
        assert accepted(compile_filter([' *.js', '*.rb '])) == ['a.js', 'c.js', 'd.js', 'e.rb']

    def test_positive_globs_accept_union(self):
        assert accepted(compile_filter(['*.js', '*.txt'])) == ['a.js', 'b.txt', 'c.js', 'd.js']

    def test_positive_union_is_order_independent(self):
        forward = accepted(compile_filter(['*.js', '*.txt']))
        backward = accepted(compile_filter(['*.txt', '*.js']))
        assert forward == backward

    def test_negated_glob_only(self):
        assert accepted(compile_filter(['!d.js'])) == ['a.js', 'b.txt', 'c.js', 'e.rb']

    def test_negated_glob_string(self):
        assert accepted(compile_filter('!*.js')) == ['b.txt', 'e.rb']

    def test_positive_and_negated_globs(self):
        assert accepted(compile_filter(['*.js', '!d.js'])) == ['a.js', 'c.js']

    def test_two_negated_globs(self):
        assert accepted(compile_filter(['!*.js', '!*.rb'])) == ['b.txt']

    def test_negative_always_wins(self):
        assert accepted(compile_filter(['d.js', '*.js', '!d.js'])) == ['a.js', 'c.js']
        assert accepted(compile_filter(['d.js', '!d.js'])) == []

    def test_tuple_spec(self):
        assert accepted(compile_filter(('*.rb',))) == ['e.rb']

    def test_path_key(self):
        in_sub = make_entry(os.path.join('sub', 'a.js'))
        at_top = make_entry('a.js')

        by_path = compile_filter('sub/*.js', 'path')
        assert by_path(in_sub)
        assert not by_path(at_top)

        by_basename = compile_filter('sub/*.js', 'basename')
        assert not by_basename(in_sub)

    def test_basename_key_ignores_parent_dirs(self):
        predicate = compile_filter('*.js', 'basename')
        assert predicate(make_entry(os.path.join('deep', 'nested', 'x.js')))

    @pytest.mark.parametrize('spec', [42, {'*.js'}, ['*.js', 3], b'*.js'])
    def test_invalid_spec(self, spec):
        with pytest.raises(InvalidFilterError):
            compile_filter(spec)

    def test_invalid_spec_is_type_error(self):
        with pytest.raises(TypeError, match='Filter only supports'):
            compile_filter(3.5)
