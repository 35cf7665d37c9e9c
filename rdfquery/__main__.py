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

from pathlib import Path
import sys
from typing import Optional

#===============================================================================

from rdfquery import __version__
from rdfquery.query import Query
from rdfquery.rdf import blankNode, literal, namedNode, RdfStore, Term
from rdfquery.utils import Issue, log, make_issue, pretty_log, set_log_level

#===============================================================================

def parse_value(text: str) -> Term:
#==================================
    try:
        if text.startswith('<') and text.endswith('>'):
            return namedNode(text[1:-1])
        elif text.startswith('_:'):
            return blankNode(text[2:])
        return literal(text)
    except ValueError as e:
        raise Issue(f'{e}: {text}')

def parse_criteria(filters: list[str]) -> dict[str, list[Term]]:
#===============================================================
    criteria: dict[str, list[Term]] = {}
    for criterion in filters:
        (name, sep, value) = criterion.partition('=')
        if sep == '' or name == '':
            raise Issue(f'Filter must be VAR=VALUE: {criterion}')
        criteria.setdefault(name, []).append(parse_value(value))
    return criteria

def load_statements(sources: list[str]) -> RdfStore:
#===================================================
    store = RdfStore()
    for source in sources:
        source_path = Path(source)
        if not source_path.exists():
            raise IOError(f'Missing RDF source file: {source}')
        store.load_file(source_path)
    log.info(f'{len(store)} statements in total')
    return store

def apply_modifiers(query: Query, args) -> Query:
#================================================
    if args.filter:
        query.filter(parse_criteria(args.filter))
    if args.order:
        query.order(*args.order, reverse=args.desc)
    if args.project:
        query.project(*args.project)
    if args.distinct:
        query.distinct()
    if args.offset is not None:
        query.offset(args.offset)
    if args.limit is not None:
        query.limit(args.limit)
    return query

def print_solutions(query: Query):
#=================================
    for solution in query:
        print(' '.join(f'?{name}={value}' for name, value in solution.items()))
    log.info(f'{pretty_log(query.count())} solutions')

#===============================================================================

def main(argv: Optional[list[str]]=None) -> int:
    import argparse
    parser = argparse.ArgumentParser(description='Count RDF statements and query their solutions')
    parser.add_argument('-v', '--version', action='version', version=__version__)
    parser.add_argument('--debug', action='store_true', help='Log each solution modifier')
    parser.add_argument('--where', metavar='PATTERN', help='Graph pattern to select solutions with')
    parser.add_argument('--filter', metavar='VAR=VALUE', action='append', help='Keep solutions with VAR bound to VALUE')
    parser.add_argument('--order', metavar='VAR', action='append', help='Order solutions by VAR')
    parser.add_argument('--desc', action='store_true', help='Order solutions in descending order')
    parser.add_argument('--project', metavar='VAR', action='append', help='Only show VAR in solutions')
    parser.add_argument('--distinct', action='store_true', help='Remove duplicate solutions')
    parser.add_argument('--offset', metavar='N', type=int, help='Skip the first N solutions')
    parser.add_argument('--limit', metavar='N', type=int, help='Show at most N solutions')
    parser.add_argument('sources', metavar='RDF', nargs='+', help='Input RDF source files')

    args = parser.parse_args(argv)
    if args.debug:
        import logging
        set_log_level(logging.DEBUG)

    try:
        store = load_statements(args.sources)
        print(len(store))
        if args.where is not None:
            query = store.query(f'SELECT * WHERE {{ {args.where} }}')
            print_solutions(apply_modifiers(query, args))
    except (Issue, IOError) as e:
        log.error(make_issue(e).reason)
        return 1
    return 0

#===============================================================================

if __name__ == '__main__':
    sys.exit(main())

#===============================================================================
#===============================================================================
