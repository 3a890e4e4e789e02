"""Handles interactive/command-line mode for the sugiru interpreter. Uses cmd as backend."""

import cmd
import getpass


class Shell(cmd.Cmd):
    """Sugiru read-eval-print shell. Every complete chunk of input gets a fresh lexer and parser; bindings made with let
    live on in the session.
    """
    intro = "[ SUGIRU REPL MODE : USER {{{user}}} ]\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = Shell.intro.format(user=Shell.current_user())

        self._tmp_line = ""
        self.line_num = 0

    @staticmethod
    def current_user():
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return "unknown"

    def onecmd(self, line):
        """Only the bare words 'help', 'exit' and 'EOF' are shell commands; any other line (help(1), exit (x)) is
        sugiru source.
        """
        if line == "EOF" or (line.strip() in ("help", "exit") and not self._tmp_line):
            return super().onecmd(line.strip())
        return self.default(line)

    def default(self, line):
        """Executes arbitrary sugiru source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line.strip():
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the sugiru interpreter!\n\n"
              "Sugiru is a small expression language with integers, booleans, let bindings, \n"
              "if/else, and first-class functions with closures.\n\n"
              "Try it out by typing 'let add = fn(a, b) { a + b };'. This will bind a \n"
              "function to the name 'add'. Next, try typing 'add(2, 3)', giving 5 as the \n"
              "result. Type 'exit' on a line of its own or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
