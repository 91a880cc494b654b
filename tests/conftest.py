"""Shared test fixtures for the bundle_extractor test suite.

WHY: Several test modules need the same small bundles — one per known
container shape — so they all exercise the same, hand-checked inputs.

HOW: Module-level constants hold the bundle texts together with the
module sources each one must yield. Pytest fixtures hand them out and
write them to disk where a test needs a file.

RULES:
- Every bundle here is valid JavaScript
- Expected module sources are literal substrings of their bundle
"""

from typing import Dict

import pytest


# ---------------------------------------------------------------------------
# webpack 1-3 additional chunk: webpackJsonp([<chunks>], {<modules>})
# ---------------------------------------------------------------------------

MODULE_0 = 'function(module, exports) {\n  module.exports = "zero";\n}'
MODULE_1 = "function(module, exports, __webpack_require__) {\n  __webpack_require__(0);\n}"

JSONP_OBJECT_BUNDLE = (
    "webpackJsonp([0], {\n"
    '"0": ' + MODULE_0 + ",\n"
    '"1": ' + MODULE_1 + "\n"
    "});\n"
)

JSONP_OBJECT_MODULES: Dict[str, str] = {"0": MODULE_0, "1": MODULE_1}


# ---------------------------------------------------------------------------
# webpack main bundle: runtime IIFE with an array module list
# ---------------------------------------------------------------------------

RUNTIME = (
    "function(modules) {\n"
    "  var installedModules = {};\n"
    "  function __webpack_require__(moduleId) {\n"
    "    var module = installedModules[moduleId] = {exports: {}};\n"
    "    modules[moduleId].call(module.exports, module, module.exports, __webpack_require__);\n"
    "    return module.exports;\n"
    "  }\n"
    "  return __webpack_require__(0);\n"
    "}"
)

MAIN_MODULE_0 = "function(module, exports, __webpack_require__) {\n  __webpack_require__(2);\n}"
MAIN_MODULE_2 = "function(module, exports) {\n  console.log(\"two\");\n}"

MAIN_BUNDLE = (
    "/******/ (" + RUNTIME + ")\n"
    "/************************************************************************/\n"
    "/******/ ([\n"
    "/* 0 */\n"
    "/***/ " + MAIN_MODULE_0 + ",\n"
    "/* 1 */,\n"
    "/* 2 */\n"
    "/***/ " + MAIN_MODULE_2 + "\n"
    "/******/ ]);\n"
)

MAIN_MODULES: Dict[str, str] = {"0": MAIN_MODULE_0, "2": MAIN_MODULE_2}


# ---------------------------------------------------------------------------
# webpack 4 additional chunk pushed onto window.webpackJsonp
# ---------------------------------------------------------------------------

PUSH_MODULE = "function(e, t, n) {\n  e.exports = n(\"./src/util.js\");\n}"

WINDOW_PUSH_BUNDLE = (
    "(window.webpackJsonp = window.webpackJsonp || []).push([[0], {\n"
    '"./src/index.js": ' + PUSH_MODULE + "\n"
    "}, [[\"./src/index.js\", 1]]]);\n"
)

WINDOW_PUSH_MODULES: Dict[str, str] = {"./src/index.js": PUSH_MODULE}


# ---------------------------------------------------------------------------
# UMD library output: the main bundle hides inside a factory function
# ---------------------------------------------------------------------------

UMD_MODULE_0 = "function(e, t, n) {\n  e.exports = n(1);\n}"
UMD_MODULE_1 = "function(e, t) {\n  e.exports = 42;\n}"

UMD_BUNDLE = (
    "!function(e, t) {\n"
    '  "object" == typeof exports && "object" == typeof module\n'
    "    ? module.exports = t()\n"
    '    : "function" == typeof define && define.amd ? define([], t) : e.answer = t();\n'
    "}(this, function() {\n"
    "  return function(e) {\n"
    "    function n(r) { var o = {exports: {}}; e[r].call(o.exports, o, o.exports, n); return o.exports; }\n"
    "    return n(0);\n"
    "  }([" + UMD_MODULE_0 + ", " + UMD_MODULE_1 + "]);\n"
    "});\n"
)

UMD_MODULES: Dict[str, str] = {"0": UMD_MODULE_0, "1": UMD_MODULE_1}


PLAIN_SCRIPT = 'console.log("hi");\n'


@pytest.fixture
def jsonp_object_bundle():
    return JSONP_OBJECT_BUNDLE


@pytest.fixture
def main_bundle():
    return MAIN_BUNDLE


@pytest.fixture
def window_push_bundle():
    return WINDOW_PUSH_BUNDLE


@pytest.fixture
def umd_bundle():
    return UMD_BUNDLE


@pytest.fixture
def bundle_file(tmp_path):
    """The main bundle written to ``<tmp>/main.js``."""
    path = tmp_path / "main.js"
    path.write_bytes(MAIN_BUNDLE.encode("utf-8"))
    return path


@pytest.fixture
def plain_script_file(tmp_path):
    path = tmp_path / "app.js"
    path.write_text(PLAIN_SCRIPT, encoding="utf-8")
    return path
