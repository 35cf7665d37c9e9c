#===============================================================================
#
#  rdfquery: solution modifiers for RDF basic graph pattern queries
#
#  Copyright (c) 2020 - 2025 David Brooks
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
#
#===============================================================================

import copy

import pytest

#===============================================================================

from rdfquery import Solution
from rdfquery.rdf import literal, namedNode, variable

#===============================================================================

TITLE = literal('SPARQL in Python', language='en')
AUTHOR = namedNode('http://ar.to/#self')

def test_lookup():
#=================
    solution = Solution({'title': TITLE, 'author': AUTHOR})
    assert solution['title'] == TITLE
    assert solution['?author'] == AUTHOR
    assert solution[variable('author')] == AUTHOR
    with pytest.raises(KeyError):
        solution['date']

def test_unbound():
#==================
    solution = Solution({'title': TITLE})
    assert solution.get('date') is None
    assert solution.get('date', AUTHOR) == AUTHOR
    assert solution.bound('title')
    assert solution.bound(variable('title'))
    assert not solution.bound('date')
    assert 'title' in solution
    assert 'date' not in solution
    assert 42 not in solution

def test_attribute_access():
#===========================
    solution = Solution({'title': TITLE})
    assert solution.title == TITLE
    assert solution.date is None
    with pytest.raises(AttributeError):
        solution._title

def test_invalid_names():
#========================
    solution = Solution({'title': TITLE})
    assert not solution.bound(1)
    assert solution.get(1) is None
    assert solution.get(1, AUTHOR) == AUTHOR

def test_attribute_names_need_get():
#===================================
    solution = Solution({'values': TITLE, 'count': AUTHOR})
    assert callable(solution.values)
    assert solution.get('values') == TITLE
    assert solution.count == AUTHOR

def test_mapping():
#==================
    solution = Solution({'title': TITLE, 'author': AUTHOR})
    assert len(solution) == 2
    assert list(solution) == ['title', 'author']
    assert solution.names == ['title', 'author']
    assert list(solution.values()) == [TITLE, AUTHOR]
    assert solution == {'title': TITLE, 'author': AUTHOR}
    assert solution == Solution({'author': AUTHOR, 'title': TITLE})
    assert solution != Solution({'title': TITLE})

def test_view_is_not_a_copy():
#=============================
    bindings = {'title': TITLE}
    solution = Solution(bindings)
    bindings['author'] = AUTHOR
    assert solution.bound('author')
    copied = solution.to_dict()
    copied['date'] = literal('2010-01-01')
    assert not solution.bound('date')

def test_copy():
#===============
    solution = Solution({'title': TITLE})
    assert copy.copy(solution) == solution

def test_repr():
#===============
    solution = Solution({'author': AUTHOR})
    assert repr(solution) == 'Solution(?author=<http://ar.to/#self>)'

#===============================================================================
#===============================================================================
