import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from search_utils import (
    expand_fuzzy,
    fuzzy_terms,
    match_expression,
    split_terms,
    tokenize,
)


def test_tokenize_splits_and_lowercases():
    assert tokenize('Foo_bar, BAZ baz') == ['foo', 'bar', 'baz']
    assert tokenize('') == []


def test_fuzzy_terms_within_one_edit():
    vocab = ['api', 'apu', 'ape', 'apple', 'xyz', 'ap', 'apis']
    assert fuzzy_terms('api', vocab) == ['ap', 'ape', 'api', 'apis', 'apu']


def test_expand_single_word():
    assert expand_fuzzy('API', ['api', 'apu', 'rest']) == '("api" OR "apu")'


def test_expand_joins_words_with_or():
    assert expand_fuzzy('pr ci', ['pr', 'ci']) == '("pr") OR ("ci")'


def test_expand_drops_words_without_candidates():
    assert expand_fuzzy('pr xyz', ['pr']) == '("pr")'
    assert expand_fuzzy('xyz', ['pr']) == ''


def test_split_terms_separates_exact_from_fuzzy():
    vocab = ['pr', 'pa', 'pull', 'ci']
    assert split_terms('PR ci', vocab) == (['pr', 'ci'], ['pa'])
    assert split_terms('pq', vocab) == ([], ['pa', 'pr'])
    assert split_terms('xyz', vocab) == ([], [])


def test_split_terms_keeps_exact_word_out_of_fuzzy():
    assert split_terms('pr pa', ['pr', 'pa']) == (['pr', 'pa'], [])


def test_match_expression_for_column():
    assert match_expression(['pr', 'pa'], 'acronym') == '(acronym : "pr" OR acronym : "pa")'
    assert match_expression(['pr']) == '("pr")'
    assert match_expression([], 'acronym') == ''
