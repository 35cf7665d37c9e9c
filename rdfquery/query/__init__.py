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

"""
A basic graph pattern query and its solution modifiers.

Filtering solutions by criteria::

    query.filter({'author': namedNode('http://ar.to/#self')})
    query.filter(author='Arto Bendiken')
    query.filter(author=[namedNode('http://ar.to/#self'), 'Arto Bendiken'])

Filtering solutions with a predicate::

    query.filter(predicate=lambda solution: isLiteral(solution.author))
    query.filter(predicate=lambda solution: solution.bound('date'))

Then::

    query.order('updated', 'created').project('title').distinct()
    query.offset(25).limit(10)

Modifiers rewrite the query's solutions in place and return the query, so
they can be chained. A query is not thread-safe: callers sharing one between
threads must serialise access to it, including any iteration over solutions.
"""

#===============================================================================

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Optional, Self

#===============================================================================

from ..rdf import as_term, Bindings, Term, term_string, Variable, variable_name
from ..utils import InvalidArgument, log
from .pattern import Pattern
from .solution import Solution

#===============================================================================

type Criteria = Mapping[str|Variable, Any]
type SolutionPredicate = Callable[[Solution], Any]

MULTIPLE_VALUES = (list, tuple, set, frozenset)

#===============================================================================

class Query:
    def __init__(self, solutions: Optional[Iterable[Mapping[str|Variable, Term]]]=None,
                       variables: Optional[Mapping[str, Variable]]=None,
                       patterns: Optional[Iterable[Pattern]]=None, **options):
        self.__patterns: list[Pattern] = list(patterns) if patterns is not None else []
        if variables is None:
            variables = {}
            for pattern in self.__patterns:
                variables.update(pattern.variables)
        self.__variables: dict[str, Variable] = dict(variables)
        self.__solutions: list[Bindings] = []
        self.solutions = solutions if solutions is not None else []
        self.__options = options

    def __iter__(self) -> Iterator[Solution]:
        return self.each_solution()

    def __len__(self) -> int:
        return len(self.__solutions)

    def __repr__(self) -> str:
        return f'Query({len(self.__solutions)} solutions, variables={list(self.__variables)})'

    @property
    def options(self) -> dict[str, Any]:
        return self.__options

    @property
    def patterns(self) -> list[Pattern]:
        return self.__patterns

    @property
    def size(self) -> int:
        return len(self.__solutions)

    @property
    def solutions(self) -> list[Bindings]:
        return self.__solutions

    @solutions.setter
    def solutions(self, solutions: Iterable[Mapping[str|Variable, Term]]):
        # Every row gets its own dictionary, with a `None` value leaving its variable unbound
        self.__solutions = [
            {variable_name(name): as_term(value) for name, value in bindings.items() if value is not None}
                for bindings in solutions
        ]

    @property
    def variables(self) -> dict[str, Variable]:
        return self.__variables

    def count(self) -> int:
    #======================
        return len(self.__solutions)

    def each_solution(self) -> Iterator[Solution]:
    #=============================================
        for bindings in self.__solutions:
            yield Solution(bindings)

    def filter(self, criteria: Optional[Criteria]=None, /,
                     predicate: Optional[SolutionPredicate|Any]=None, **kwds) -> Self:
    #=======================================================================================
        """
        Filter solutions either by ``predicate`` or by ``criteria``.

        A callable ``predicate`` takes precedence over any criteria. Keyword
        arguments are added to ``criteria``, as is a ``predicate`` that isn't
        callable, so ``filter(predicate=node)`` filters on a ``predicate``
        variable.
        """
        if predicate is not None and not callable(predicate):
            kwds['predicate'] = predicate
            predicate = None
        if predicate is not None:
            return self.filter_by_predicate(predicate)
        criteria = dict(criteria) if criteria is not None else {}
        criteria.update(kwds)
        return self.filter_by_criteria(criteria)

    def filter_by_criteria(self, criteria: Criteria) -> Self:
    #========================================================
        """
        Keep the solutions that bind each variable in ``criteria`` to the given
        value, or to one of them when a list, tuple or set of values is given.
        An unbound variable never matches.
        """
        accepted: dict[str, set[Term]] = {}
        for name, value in criteria.items():
            values = value if isinstance(value, MULTIPLE_VALUES) else [value]
            accepted[variable_name(name)] = {as_term(v) for v in values}
        def matches(bindings: Bindings) -> bool:
            return all(bindings.get(name) in values for name, values in accepted.items())
        return self.__retain(matches, 'filter')

    def filter_by_predicate(self, predicate: SolutionPredicate) -> Self:
    #===================================================================
        """
        Keep the solutions for which ``predicate`` is true.

        An exception raised by ``predicate`` is not caught; solutions are left
        unchanged when this happens.
        """
        return self.__retain(lambda bindings: predicate(Solution(bindings)), 'filter')

    def order(self, *variables: str|Variable, reverse: bool=False) -> Self:
    #======================================================================
        """
        Sort solutions by the string form of the values of ``variables``.

        Values are compared as their lexical strings, so ``"10"`` comes before
        ``"9"``, with an unbound variable sorting as an empty string. The sort
        is stable.
        """
        if len(variables) == 0:
            raise InvalidArgument('At least one variable is needed to order solutions')
        size = len(self.__solutions)
        names = [variable_name(variable) for variable in variables]
        self.__solutions.sort(
            key=lambda bindings: tuple(term_string(bindings.get(name)) for name in names),
            reverse=reverse)
        log.debug('Ordered solutions', variables=names, reverse=reverse,
                                     before=size, after=len(self.__solutions))
        return self

    order_by = order

    def project(self, *variables: str|Variable) -> Self:
    #===================================================
        """
        Restrict each solution to only ``variables``. Does nothing if no
        variables are given.

        Projection can make solutions equal, so call :meth:`distinct` after it
        to remove duplicates.
        """
        if len(variables):
            names = {variable_name(variable) for variable in variables}
            for bindings in self.__solutions:
                for name in [name for name in bindings if name not in names]:
                    del bindings[name]
            log.debug('Projected solutions', variables=sorted(names),
                                               before=len(self.__solutions), after=len(self.__solutions))
        return self

    select = project

    def distinct(self) -> Self:
    #==========================
        seen: set[frozenset[tuple[str, Term]]] = set()
        def first_time(bindings: Bindings) -> bool:
            key = frozenset(bindings.items())
            if key in seen:
                return False
            seen.add(key)
            return True
        return self.__retain(first_time, 'distinct')

    # We always remove duplicates
    reduced = distinct

    def offset(self, start: int) -> Self:
    #====================================
        return self.slice(start, max(len(self.__solutions) - start, 0))

    def limit(self, length: int) -> Self:
    #====================================
        return self.slice(0, length)

    def slice(self, start: int, length: int) -> Self:
    #================================================
        """
        Keep at most ``length`` solutions, starting from the ``start`` offset.
        There are no solutions left when ``start`` is past the last one.
        """
        if start < 0 or length < 0:
            raise InvalidArgument(f'Invalid slice of solutions: start={start}, length={length}')
        size = len(self.__solutions)
        if start < size:
            self.__solutions[:] = self.__solutions[start:start + length]
        else:
            self.__solutions.clear()
        log.debug('Sliced solutions', start=start, length=length,
                                      before=size, after=len(self.__solutions))
        return self

    def __retain(self, keep: Callable[[Bindings], Any], modifier: str) -> Self:
    #==========================================================================
        size = len(self.__solutions)
        # Survivors are found before any solution is removed
        retained = [bindings for bindings in self.__solutions if keep(bindings)]
        self.__solutions[:] = retained
        log.debug('Retained solutions', modifier=modifier, before=size, after=len(retained))
        return self

#===============================================================================
#===============================================================================
