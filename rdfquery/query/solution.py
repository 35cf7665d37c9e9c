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

from collections.abc import Iterator, Mapping
from typing import Any, Optional

#===============================================================================

from ..rdf import Bindings, Term, Variable, variable_name

#===============================================================================

class Solution(Mapping):
    """
    A read-only view of one row of query bindings.

    Variables can be given either as names (with or without a leading ``?``)
    or as :class:`Variable` terms. Looking up an unbound variable with
    :meth:`get`, or as an attribute, gives ``None``:

        >>> solution.get('title')
        >>> solution.title
        >>> solution.bound('title')
        False

    Attribute access only reaches variables whose names aren't attributes
    of a solution, so use :meth:`get` for variables such as ``values``,
    ``keys``, ``items``, ``get``, ``names``, ``bound`` or ``to_dict``.
    """

    def __init__(self, bindings: Bindings):
        self.__bindings = bindings

    def __getitem__(self, name: str|Variable) -> Term:
        return self.__bindings[variable_name(name)]

    def __getattr__(self, name: str) -> Optional[Term]:
        if name.startswith('_'):
            raise AttributeError(name)
        return self.__bindings.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__bindings)

    def __len__(self) -> int:
        return len(self.__bindings)

    def __contains__(self, name: Any) -> bool:
        return self.bound(name)

    def __repr__(self) -> str:
        bindings = ', '.join(f'?{name}={value}' for name, value in self.__bindings.items())
        return f'Solution({bindings})'

    def bound(self, name: str|Variable) -> bool:
    #===========================================
        try:
            return variable_name(name) in self.__bindings
        except ValueError:
            return False

    def get(self, name: str|Variable, default: Optional[Term]=None) -> Optional[Term]:
    #=================================================================================
        try:
            return self.__bindings.get(variable_name(name), default)
        except ValueError:
            return default

    @property
    def names(self) -> list[str]:
        return list(self.__bindings.keys())

    def to_dict(self) -> Bindings:
    #=============================
        return dict(self.__bindings)

#===============================================================================
#===============================================================================
