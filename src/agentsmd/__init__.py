"""AGENTS.md assembler.

Collects guideline fragments, project source files and files shipped by
Cargo dependencies, renders each one into a markdown section and joins
them, in declaration order, into a single AGENTS.md document.

The generated document starts with a banner so readers know not to
edit it by hand:
    <!-- This file is autogenerated by agentsmd -->
"""

AUTOGEN_BANNER = "<!-- This file is autogenerated by agentsmd -->"
