"""
Lispy - Main Entry Point
A minimal Lisp with S-expressions, Q-expressions and integer arithmetic
"""

import sys
import argparse
from pathlib import Path
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from parsing import create_parser, pretty_print_cst, LispyParser
from error_handling import LispyParseError
from interpreter import create_interpreter, LispyInterpreter
from utilities import BUILTIN_NAMES


VERSION = "0.0.0.0.1"
HISTORY_FILE = "~/.lispy_history"
HISTORY_LENGTH = 1000
PROMPT = "lispy> "

REPL_COMMANDS = [":parse", ":help", "exit"]


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      description='Lispy - a minimal Lisp with S-expressions and Q-expressions',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s                        # Interactive mode
  %(prog)s script.lspy            # Evaluate every line of a script
  %(prog)s --parse script.lspy    # Parse script and show CST
  %(prog)s -i --debug             # Interactive mode with debug
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Lispy script file to execute, one expression per line'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show CST (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=f'Lispy Version {VERSION}'
  )

  return parser


def process_line(line: str, parser: LispyParser, interpreter: LispyInterpreter) -> str:
  """Parse, evaluate and render one line of input"""
  try:
    cst = parser.parse_string(line, "<stdin>")
  except LispyParseError as e:
    return str(e)
  return interpreter.interpret(cst)


def parse_file(script_path: str, debug: bool = False) -> None:
  """Parse a Lispy script file and show the CST of every line"""
  parser = create_parser(debug)

  try:
    print(f"Parsing {script_path}...")
    cst_nodes = parser.parse_file(script_path)

    print(f"\nParsed {len(cst_nodes)} lines:")
    print("=" * 50)

    for i, node in enumerate(cst_nodes, 1):
      print(f"\nLine {i}:")
      print(pretty_print_cst(node))

  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    sys.exit(1)
  except LispyParseError as e:
    print(f"Parse error in '{script_path}': {e}")
    sys.exit(1)


def run_script_file(script_path: str, debug: bool = False) -> None:
  """Evaluate a Lispy script file line by line, printing each result"""
  parser = create_parser(debug)
  interpreter = create_interpreter(debug)

  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      lines = f.read().splitlines()
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    print(f"  Hint: Make sure you have read permissions for this file")
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding")
    sys.exit(1)

  for line in lines:
    if not line.strip():
      continue
    if debug:
      print(f"Line: {line}")
    print(process_line(line, parser, interpreter))


def setup_readline():
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser(HISTORY_FILE)
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(HISTORY_LENGTH)

  completions = BUILTIN_NAMES + REPL_COMMANDS

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  # Save history on exit
  import atexit
  atexit.register(readline.write_history_file, history_file)


def print_help() -> None:
  print("REPL Commands:")
  print("  :parse <expr>     - Show parsed CST")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language features:")
  print("  + 1 2 3                   - Arithmetic: + - * /")
  print("  (- 5)                     - Unary negation")
  print("  {1 2 3}                   - Q-expression (quoted list)")
  print("  list 1 2 3                - Build a Q-expression")
  print("  head {1 2 3}              - First element")
  print("  tail {1 2 3}              - All but the first element")
  print("  join {1 2} {3}            - Concatenate Q-expressions")
  print("  eval {+ 1 2}              - Evaluate a Q-expression")


def run_interactive_mode(debug: bool = False) -> None:
  """Run Lispy in interactive mode"""
  print(f"Lispy Version {VERSION}")
  print("Press Ctrl+c to Exit\n")
  if debug:
    print("Debug mode enabled")

  setup_readline()

  parser = create_parser(debug)
  interpreter = create_interpreter(debug)

  while True:
    try:
      code = input(PROMPT)

      if code.strip() == "exit":
        break

      if not code.strip():
        continue

      if code.startswith(":parse "):
        try:
          cst = parser.parse_string(code[7:], "<stdin>")
          print("Expression CST:")
          print(pretty_print_cst(cst), end='')
        except LispyParseError as e:
          print(e)
        continue

      if code.strip() == ":help":
        print_help()
        continue

      print(process_line(code, parser, interpreter))

    except KeyboardInterrupt:
      print("\nGoodbye!")
      break
    except EOFError:
      print("\nGoodbye!")
      break
    except Exception as e:
      print(f"Unexpected error: {e}")
      if debug:
        import traceback
        traceback.print_exc()


def show_language_info() -> None:
  """Show Lispy language information"""
  print("Lispy Programming Language")
  print("=" * 50)
  print("A minimal Lisp with:")
  print("• Integer arithmetic")
  print("• S-expressions (evaluated) and Q-expressions (quoted)")
  print("• List builtins: list, head, tail, join, eval")
  print()


def main() -> None:
  """Main entry point for Lispy"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args()

  if len(sys.argv) == 1:
    show_language_info()
    run_interactive_mode(debug=False)
    return

  if args.script:
    if not Path(args.script).exists():
      print(f"Error: Script file '{args.script}' does not exist")
      sys.exit(1)

    if args.parse:
      parse_file(args.script, debug=args.debug)
    else:
      run_script_file(args.script, debug=args.debug)

  elif args.interactive:
    run_interactive_mode(debug=args.debug)

  else:
    arg_parser.print_help()
    print()
    show_language_info()


if __name__ == "__main__":
  main()
