from teachlang.cli import main

main(prog_name="teachlang")
