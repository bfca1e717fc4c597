from reindent.cli import main

main(prog_name="reindent")
