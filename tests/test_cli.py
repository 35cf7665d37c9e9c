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

import pytest

#===============================================================================

from rdfquery.__main__ import main, parse_criteria, parse_value
from rdfquery import Issue
from rdfquery.rdf import blankNode, literal, namedNode

#===============================================================================

PEOPLE = """
@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:x foaf:name "Alice" ; foaf:age 30 .
ex:y foaf:name "Bob" .
ex:z foaf:name "Alice" .
"""

NAME_PATTERN = '?s <http://xmlns.com/foaf/0.1/name> ?o'

@pytest.fixture
def people(tmp_path):
    source = tmp_path / 'people.ttl'
    source.write_text(PEOPLE)
    return str(source)

def solution_lines(output: str) -> list[str]:
#============================================
    return [line for line in output.splitlines() if line.startswith('?')]

#===============================================================================

def test_parse_value():
#======================
    assert parse_value('<http://example.org/x>') == namedNode('http://example.org/x')
    assert parse_value('_:b0') == blankNode('b0')
    assert parse_value('Alice') == literal('Alice')

def test_parse_criteria():
#=========================
    assert parse_criteria(['o=Alice', 'o=Bob', 's=<http://example.org/x>']) == {
        'o': [literal('Alice'), literal('Bob')],
        's': [namedNode('http://example.org/x')]
    }
    with pytest.raises(Issue):
        parse_criteria(['Alice'])
    with pytest.raises(Issue):
        parse_value('<not an iri>')

def test_count(people, capsys):
#==============================
    assert main([people]) == 0
    assert '4' in capsys.readouterr().out.splitlines()

def test_missing_source(tmp_path):
#=================================
    assert main([str(tmp_path / 'missing.ttl')]) == 1

def test_query(people, capsys):
#==============================
    assert main([people, '--where', NAME_PATTERN, '--order', 'o', '--project', 'o', '--distinct']) == 0
    assert solution_lines(capsys.readouterr().out) == ['?o="Alice"', '?o="Bob"']

def test_query_filter_and_paging(people, capsys):
#================================================
    assert main([people, '--where', NAME_PATTERN, '--filter', 'o=Alice',
                 '--order', 's', '--desc', '--offset', '0', '--limit', '1']) == 0
    lines = solution_lines(capsys.readouterr().out)
    assert [sorted(line.split()) for line in lines] == [['?o="Alice"', '?s=<http://example.org/z>']]

def test_query_invalid_paging(people):
#=====================================
    assert main([people, '--where', NAME_PATTERN, '--limit', '-1']) == 1

def test_query_invalid_filter(people):
#=====================================
    assert main([people, '--where', NAME_PATTERN, '--filter', 's=<not an iri>']) == 1

#===============================================================================
#===============================================================================
