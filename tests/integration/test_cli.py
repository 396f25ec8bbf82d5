#!/usr/bin/env python3
"""End-to-end tests running the flamaster CLI in a subprocess"""

import os
import pathlib
import subprocess
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
SRC_PATH = os.path.join(PROJECT_ROOT, 'src')


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.fixtures = pathlib.Path(PROJECT_ROOT) / 'tests' / 'fixtures'

    def _run(self, args, expect_success=True):
        cmd = [sys.executable, '-m', 'flamaster.cli'] + [str(a) for a in args]
        env = os.environ.copy()
        env['PYTHONPATH'] = SRC_PATH + os.pathsep + env.get('PYTHONPATH', '')
        res = subprocess.run(cmd, cwd=PROJECT_ROOT, env=env, capture_output=True, text=True)
        if expect_success and res.returncode != 0:
            self.fail(f"Command failed {cmd}\nSTDOUT:\n{res.stdout}\nSTDERR:\n{res.stderr}")
        return res

    def test_per_item_to_stdout(self):
        res = self._run([self.fixtures / 'item.txt.j2', self.fixtures / 'pricelist.csv'])
        self.assertEqual(
            res.stdout.splitlines(),
            [
                'Corner Store: apple costs 1.20',
                'Corner Store: pear costs 0.95',
                'Corner Store: fig, dried costs 3.50',
            ],
        )

    def test_single_output_flag(self):
        res = self._run(
            ['-os', self.fixtures / 'list.txt.j2', self.fixtures / 'pricelist.csv']
        )
        self.assertEqual(res.stdout.count('Corner Store'), 1)
        self.assertIn('- fig, dried 3.50', res.stdout)

    def test_single_output_from_options_section(self):
        res = self._run([self.fixtures / 'list.txt.j2', self.fixtures / 'pricelist_single.csv'])
        self.assertEqual(res.stdout.count('Corner Store'), 1)
        self.assertIn('- apple 1.20', res.stdout)
        self.assertIn('- pear 0.95', res.stdout)

    def test_unknown_option_aborts_before_rendering(self):
        res = self._run(
            [self.fixtures / 'item.txt.j2', self.fixtures / 'bogus_option.csv'],
            expect_success=False,
        )
        self.assertEqual(res.returncode, 2)
        self.assertEqual(res.stdout, '')
        self.assertIn("unknown option 'bogus'", res.stderr)
        self.assertIn('run with -v', res.stderr)

    def test_garbage_row_fails(self):
        res = self._run(
            [self.fixtures / 'item.txt.j2', self.fixtures / 'garbage.csv'], expect_success=False
        )
        self.assertEqual(res.returncode, 2)
        self.assertIn('line 1', res.stderr)
        self.assertEqual(res.stdout, '')

    def test_missing_csv(self):
        res = self._run(
            [self.fixtures / 'item.txt.j2', self.fixtures / 'missing.csv'], expect_success=False
        )
        self.assertEqual(res.returncode, 2)
        self.assertIn('cannot open CSV', res.stderr)

    def test_template_type_error_exits_with_diagnostic(self):
        with tempfile.TemporaryDirectory() as td:
            tmpl = pathlib.Path(td) / 'add.j2'
            tmpl.write_text('{{ item.price + 1 }}\n', encoding='utf-8')
            res = self._run([tmpl, self.fixtures / 'pricelist.csv'], expect_success=False)
            self.assertEqual(res.returncode, 2)
            self.assertIn('ERROR: rendering failed for item 0', res.stderr)
            self.assertNotIn('Traceback', res.stderr)

    def test_duplicate_output_name_fails(self):
        with tempfile.TemporaryDirectory() as td:
            res = self._run(
                [
                    '-ot',
                    'out.txt',
                    '-or',
                    td,
                    self.fixtures / 'item.txt.j2',
                    self.fixtures / 'pricelist.csv',
                ],
                expect_success=False,
            )
            self.assertEqual(res.returncode, 2)
            self.assertIn('already written', res.stderr)

    def test_usage_error(self):
        res = self._run([self.fixtures / 'item.txt.j2'], expect_success=False)
        self.assertEqual(res.returncode, 2)
        self.assertIn('usage:', res.stderr)

    def test_output_files(self):
        with tempfile.TemporaryDirectory() as td:
            self._run(
                [
                    '-ot',
                    '{{ index }}-{{ item.name | replace(",", "") | replace(" ", "_") }}.txt',
                    '-or',
                    td,
                    self.fixtures / 'item.txt.j2',
                    self.fixtures / 'pricelist.csv',
                ]
            )
            names = sorted(p.name for p in pathlib.Path(td).iterdir())
            self.assertEqual(names, ['0-apple.txt', '1-pear.txt', '2-fig_dried.txt'])
            text = (pathlib.Path(td) / '1-pear.txt').read_text(encoding='utf-8')
            self.assertEqual(text, 'Corner Store: pear costs 0.95\n')

    def test_merge_headers(self):
        with tempfile.TemporaryDirectory() as td:
            tmpl = pathlib.Path(td) / 'cur.j2'
            tmpl.write_text('{{ item.name }}={{ item.currency }}\n', encoding='utf-8')
            res = self._run(['-m', tmpl, self.fixtures / 'pricelist.csv'])
            self.assertEqual(res.stdout.splitlines(), ['apple=', 'pear=USD', 'fig, dried='])

    def test_verbose_traces_rows(self):
        res = self._run(['-v', self.fixtures / 'item.txt.j2', self.fixtures / 'pricelist.csv'])
        self.assertIn('Verbose logging enabled.', res.stderr)
        self.assertIn('Parsed headers', res.stderr)


if __name__ == '__main__':
    unittest.main()
