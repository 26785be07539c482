"""
VasGoTools: Scaffolding for Go Projects

Generates Go workspaces (go.work) from the modules found below a folder and
creates new Go applications and libraries with build scripts, lint
configuration, license text and an optional git repository.
"""

__version__ = "1.0.0"
__author__ = "VasGoTools Team"
__description__ = "Scaffolding utility for Go workspaces, applications and libraries"
