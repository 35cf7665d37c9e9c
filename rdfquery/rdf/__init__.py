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

from collections import namedtuple
from pathlib import Path
from typing import Any, Iterator, Optional, Self, TYPE_CHECKING

#===============================================================================

import pyoxigraph as oxigraph

#===============================================================================

from ..utils import InvalidArgument, Issue, log, pretty_log

if TYPE_CHECKING:
    from ..query import Query

#===============================================================================

BlankNode = oxigraph.BlankNode
Literal = oxigraph.Literal
NamedNode = oxigraph.NamedNode
Variable = oxigraph.Variable

#===============================================================================

def blankNode(value: Optional[str]=None) -> BlankNode:
    return BlankNode(value)

def literal(value: str|int|float|bool, datatype: Optional[NamedNode]=None,
            language: Optional[str]=None) -> Literal:
    if language is not None:
        return Literal(value, language=language)
    return Literal(value, datatype=datatype)

def namedNode(uri: str) -> NamedNode:
    return NamedNode(uri)

def variable(name: str) -> Variable:
    return Variable(variable_name(name))

#===============================================================================

def isBlankNode(node: Any) -> bool:
    return isinstance(node, BlankNode)

def isLiteral(node: Any) -> bool:
    return isinstance(node, Literal)

def isNamedNode(node: Any) -> bool:
    return isinstance(node, NamedNode)

def isVariable(node: Any) -> bool:
    return isinstance(node, Variable)

def isTerm(node: Any) -> bool:
    return isinstance(node, (BlankNode, Literal, NamedNode, Variable))

#===============================================================================

type Term = BlankNode | Literal | NamedNode | Variable
type Bindings = dict[str, Term]

Triple = namedtuple('Triple', 'subject, predicate, object')

# What an unbound variable renders as when solutions are ordered
UNBOUND_STRING = ''

#===============================================================================

def as_term(value: Any) -> Term:
#===============================
    if isTerm(value):
        return value
    elif isinstance(value, (str, int, float, bool)):
        return literal(value)
    raise InvalidArgument(f'Cannot use {value!r} as an RDF term')

def term_string(term: Optional[Term]) -> str:
#============================================
    """
    The lexical form of a term: the URI of a named node, the lexical value
    of a literal, the identifier of a blank node and the name of a variable.
    """
    if term is None:
        return UNBOUND_STRING
    return term.value

def variable_name(name: str|Variable) -> str:
#============================================
    if isVariable(name):
        return name.value                   # type: ignore
    elif isinstance(name, str):
        return name[1:] if name[:1] in ('?', '$') else name
    raise InvalidArgument(f'Invalid variable name: {name!r}')

#===============================================================================

class RdfStore:
    def __init__(self):
        self.__store = oxigraph.Store()

    def __contains__(self, triple: Triple) -> bool:
    #==============================================
        try:
            self.__store.quads_for_pattern(triple.subject, triple.predicate, triple.object).__next__()
            return True
        except StopIteration:
            return False

    def __len__(self) -> int:
        return len(self.__store)

    def add(self, triple: Triple) -> Self:
    #=====================================
        self.__store.add(oxigraph.Quad(triple.subject, triple.predicate, triple.object))
        return self

    def load(self, source: str|bytes, format: oxigraph.RdfFormat=oxigraph.RdfFormat.TURTLE,
             base_iri: Optional[str]=None):
    #======================================================================================
        try:
            self.__store.load(input=source, format=format, base_iri=base_iri)
        except (OSError, SyntaxError, ValueError) as e:
            raise Issue(f'{e}: {base_iri or "<input>"}')

    def load_file(self, path: str|Path) -> int:
    #==========================================
        source_path = Path(path)
        format = oxigraph.RdfFormat.from_extension(source_path.suffix[1:])
        if format is None:
            raise Issue(f'Unknown RDF format: {source_path}')
        count = len(self.__store)
        try:
            self.__store.load(path=str(source_path), format=format, base_iri=source_path.resolve().as_uri())
        except (OSError, SyntaxError, ValueError) as e:
            log.error(f'{e}: {pretty_log(source_path)}')
            raise Issue(f'{e}: {source_path}')
        loaded = len(self.__store) - count
        log.info(f'Loaded {loaded} statements from {pretty_log(source_path)}')
        return loaded

    def statements(self) -> Iterator[Triple]:
    #========================================
        for quad in self.__store.quads_for_pattern(None, None, None):
            yield Triple(quad.subject, quad.predicate, quad.object)

    def select(self, sparql: str) -> tuple[list[Variable], list[Bindings]]:
    #======================================================================
        """
        Run a SPARQL ``SELECT`` and return its variables along with a binding
        row per solution. Unbound variables are left out of a row.
        """
        try:
            results = self.__store.query(sparql)
        except (SyntaxError, OSError, ValueError) as e:
            raise Issue(f'{e}: {sparql}')
        if not isinstance(results, oxigraph.QuerySolutions):
            raise Issue(f'Not a SELECT query: {sparql}')
        variables = list(results.variables)
        rows = []
        for solution in results:
            bindings = {}
            for var in variables:
                value = solution[var]
                if value is not None:
                    bindings[var.value] = value
            rows.append(bindings)
        return (variables, rows)

    def query(self, sparql: str, **options) -> 'Query':
    #==================================================
        from ..query import Query

        (variables, rows) = self.select(sparql)
        return Query(solutions=rows,
                     variables={var.value: var for var in variables},
                     **options)

#===============================================================================
#===============================================================================
