from rich.pretty import pprint

from flagparse import *

schema = Schema(
    "Sample CLI Program",
    author="Your Name",
    version="1.0.0",
    description="This is a sample program demonstrating boolean and string flags.",
)

schema.argument("verbose", "v", "verbose", "Enable verbose output", Kind.BOOL)
schema.argument("force", "f", "force", "Force the action", Kind.BOOL)
schema.argument("config", "c", "config", "Path to config file", Kind.STRING, default="/etc/config.yaml")
schema.argument("retry-count", "r", "retry", "Number of retries", Kind.INT)
schema.argument("output", "o", "output", "Output file", Kind.STRING)
schema.argument("log", "l", "log", "Log file", Kind.STRING)
schema.argument("labels", "L", "labels", "Labels for the process", Kind.STRINGLIST)
schema.exclusive("output", "log")

build = schema.command("build", "Build the project")
build.argument("input", "i", "input", "Input file", Kind.STRING, required=True)
build.argument("jobs", "j", "jobs", "Parallel jobs", Kind.INT, default=1)


if __name__ == '__main__':
    pprint(invoke(schema).todict())
