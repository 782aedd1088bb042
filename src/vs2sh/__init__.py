"""
vs2sh: Visual Studio developer environment to sh profile

Turns two environment dumps (one from a Visual Studio Developer Command
Prompt, one from a plain shell) into a profile script that sh-compatible
shells can source to get the Visual Studio command line tools.

ARCHITECTURAL GUARANTEE:
------------------------
The transformation engine (parser, diff, classifier, registry,
substitution, path specializer, overrides) contains ZERO knowledge of:
    - Shell quoting
    - The host system (cygpath, installed versions)

All of that lives in backends/, pathstyle.py, dump.py and cli.py.
All backends consume the ProfileModel unchanged.
"""

__version__ = "0.1.0"
