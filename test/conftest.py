"""
Test configuration for Lispy tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_parser
from interpreter import create_interpreter


@pytest.fixture
def parser():
  """Provide a fresh parser for each test"""
  return create_parser()


@pytest.fixture
def interpreter():
  return create_interpreter()


@pytest.fixture
def run(parser, interpreter):
  """Evaluate one line of Lispy and return the resulting value"""
  def run_line(code: str):
    return interpreter.eval_tree(parser.parse_string(code))
  return run_line


@pytest.fixture
def show_line(parser, interpreter):
  """Evaluate one line of Lispy and return the printed result"""
  def show(code: str) -> str:
    return interpreter.interpret(parser.parse_string(code))
  return show
