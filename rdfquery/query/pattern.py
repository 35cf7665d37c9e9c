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

from typing import NamedTuple

#===============================================================================

from ..rdf import isVariable, Term, Variable

#===============================================================================

class Pattern(NamedTuple):
    subject: Term
    predicate: Term
    object: Term

    def __str__(self) -> str:
        return ' '.join(str(term) for term in self) + ' .'

    @property
    def variables(self) -> dict[str, Variable]:
        return {term.value: term for term in self if isVariable(term)}

    def is_constant(self) -> bool:
    #=============================
        return not any(isVariable(term) for term in self)

#===============================================================================
#===============================================================================
