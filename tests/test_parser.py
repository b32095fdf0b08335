import os
import tempfile
import unittest
from os.path import join, dirname

from luabundler import ModuleNotFoundException
from luabundler.diagnostics import find_type_declarations, type_declaration_warnings
from luabundler.parser import ScriptTransformer, lua_string
from luabundler.resolver import ModuleResolver, resolve_module_path


def touch(root, *rel_paths):
    for rel_path in rel_paths:
        path = join(root, rel_path)
        os.makedirs(dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write('return {}\n')


class TestModuleResolver(unittest.TestCase):

    def setUp(self):
        self._tempdir = tempfile.TemporaryDirectory()
        self.base_dir = self._tempdir.name
        self.main_path = join(self.base_dir, 'main.lua')
        touch(self.base_dir, 'main.lua')

    def tearDown(self):
        self._tempdir.cleanup()

    def test_extension_probing(self):
        resolver = ModuleResolver(self.base_dir)
        touch(self.base_dir, 'x.luau')
        self.assertEqual('x.luau', resolver.resolve(self.main_path, './x'))

        touch(self.base_dir, 'x.lua')
        self.assertEqual('x.lua', resolver.resolve(self.main_path, './x'))

    def test_exact_extension(self):
        resolver = ModuleResolver(self.base_dir)
        touch(self.base_dir, 'x.lua', 'x.luau')
        self.assertEqual('x.luau', resolver.resolve(self.main_path, './x.luau'))
        self.assertEqual('x.lua', resolver.resolve(self.main_path, './x.lua'))

        with self.assertRaises(ModuleNotFoundException) as cm:
            resolver.resolve(self.main_path, './y.luau')
        self.assertEqual(['y.luau'], cm.exception.candidates)

    def test_not_found(self):
        with self.assertRaises(ModuleNotFoundException) as cm:
            resolve_module_path(self.base_dir, self.main_path, './x')
        self.assertEqual('./x', cm.exception.required_path)
        self.assertEqual('main.lua', cm.exception.referencing_path)
        self.assertEqual(['x.lua', 'x.luau'], cm.exception.candidates)

    def test_relative_to_current_module(self):
        touch(self.base_dir, 'lib/a.lua', 'lib/sub/b.lua', 'shared.lua')
        current = join(self.base_dir, 'lib', 'a.lua')
        test_cases = [
            ('./sub/b', 'lib/sub/b.lua'),
            ('sub/b', 'lib/sub/b.lua'),
            ('../shared', 'shared.lua'),
            ('./sub/../a.lua', 'lib/a.lua'),
        ]
        for required_path, expected in test_cases:
            self.assertEqual(expected, resolve_module_path(self.base_dir, current, required_path))

    def test_custom_extensions(self):
        touch(self.base_dir, 'x.lua', 'x.luau')
        resolver = ModuleResolver(self.base_dir, extensions=('.luau', '.lua'))
        self.assertEqual('x.luau', resolver.resolve(self.main_path, './x'))

    def test_directory_is_not_a_module(self):
        os.makedirs(join(self.base_dir, 'pkg.lua'))
        with self.assertRaises(ModuleNotFoundException):
            resolve_module_path(self.base_dir, self.main_path, './pkg.lua')


class TestScriptTransformer(unittest.TestCase):

    def setUp(self):
        self._tempdir = tempfile.TemporaryDirectory()
        self.base_dir = self._tempdir.name
        self.main_path = join(self.base_dir, 'main.lua')
        touch(self.base_dir, 'main.lua', 'a.lua', 'b.luau', 'lib/c.lua')
        self.transformer = ScriptTransformer(ModuleResolver(self.base_dir))

    def tearDown(self):
        self._tempdir.cleanup()

    def test_rewrite_literals(self):
        test_cases = [
            ('local a = require("./a")', 'local a = import("a.lua")'),
            ("local a = require('./a')", 'local a = import("a.lua")'),
            ('local a = require ( "./a" )', 'local a = import("a.lua")'),
            ('local b = require("./b")', 'local b = import("b.luau")'),
            ('local c = require("./lib/c.lua")', 'local c = import("lib/c.lua")'),
            ('local x = game_require("Players")', 'local x = game_require("Players")'),
            ('local x = myrequire("./a")', 'local x = myrequire("./a")'),
        ]
        for source, expected in test_cases:
            self.assertEqual(expected, self.transformer.transform(source, self.main_path).code)

    def test_dependencies_in_occurrence_order(self):
        source = 'local b = require("./b")\nlocal a = require("./a")\nlocal b2 = require("./b")\n'
        result = self.transformer.transform(source, self.main_path)
        self.assertEqual(['b.luau', 'a.lua', 'b.luau'], result.dependencies)
        self.assertEqual(3, len(result.sites))
        self.assertTrue(all(site.is_literal for site in result.sites))

    def test_dynamic_argument_passthrough(self):
        test_cases = [
            ('local m = require(script.Parent.m)', 'local m = import(script.Parent.m)'),
            ('local m = require(name)', 'local m = import(name)'),
            ('local m = require("./" .. name)', 'local m = import("./" .. name)'),
        ]
        for source, expected in test_cases:
            result = self.transformer.transform(source, self.main_path)
            self.assertEqual(expected, result.code)
            self.assertEqual([], result.dependencies)
            self.assertFalse(result.sites[0].is_literal)

    def test_missing_module(self):
        with self.assertRaises(ModuleNotFoundException) as cm:
            self.transformer.transform('require("./a")\nrequire("./missing")', self.main_path)
        self.assertEqual('main.lua', cm.exception.referencing_path)

    def test_textual_limitations(self):
        # nested parentheses end the match at the first closing parenthesis
        result = self.transformer.transform('local m = require(get("x"))', self.main_path)
        self.assertEqual('local m = import(get("x"))', result.code)
        self.assertEqual([], result.dependencies)

        # commented out requires are still rewritten and resolved
        result = self.transformer.transform('-- local a = require("./a")', self.main_path)
        self.assertEqual('-- local a = import("a.lua")', result.code)
        self.assertEqual(['a.lua'], result.dependencies)

    def test_custom_loader_name(self):
        transformer = ScriptTransformer(ModuleResolver(self.base_dir), loader_name='bundle_import')
        self.assertEqual('bundle_import("a.lua")', transformer.transform('require("./a")', self.main_path).code)

    def test_lua_string(self):
        self.assertEqual('"a.lua"', lua_string('a.lua'))
        self.assertEqual('"we\\"ird\\\\name.lua"', lua_string('we"ird\\name.lua'))


class TestDiagnostics(unittest.TestCase):

    def test_find_type_declarations(self):
        source = ('export type Point = { x: number }\n'
                  'type Local = string\n'
                  '  export   type Indented= number\n'
                  'local typeName = "type"\n'
                  'local subtype = 1\n')
        declarations = list(find_type_declarations(source))
        self.assertEqual([('Point', True, 1), ('Local', False, 2), ('Indented', True, 3)],
                         [(d.name, d.exported, d.line) for d in declarations])

    def test_type_declaration_warnings(self):
        warnings = type_declaration_warnings('type A = number\nexport type B = string\n', 'types.luau')
        self.assertEqual(["Found type 'A' in module: types.luau",
                          "Found exported type 'B' in module: types.luau"], warnings)
        self.assertEqual([], type_declaration_warnings('local a = 1\n', 'a.lua'))


if __name__ == '__main__':
    unittest.main()
