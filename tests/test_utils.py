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

from rdfquery.utils import InvalidArgument, Issue, make_issue

#===============================================================================

def test_issue():
#================
    issue = Issue('Bad things')
    assert issue.reason == str(issue) == 'Bad things'
    assert isinstance(InvalidArgument('x'), ValueError)

def test_make_issue():
#=====================
    issue = Issue('Already an issue')
    assert make_issue(issue) is issue
    try:
        raise IOError('Missing file')
    except IOError as e:
        wrapped = make_issue(e)
        assert wrapped.__traceback__ is e.__traceback__
    assert isinstance(wrapped, Issue)
    assert wrapped.reason == 'Missing file'

#===============================================================================
#===============================================================================
