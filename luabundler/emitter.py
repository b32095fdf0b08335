import datetime
from typing import Mapping, Optional

from . import VERSION
from .parser import lua_string

BUNDLE_TABLE = '__BUNDLE'

LOADER_TEMPLATE = '''\
function {loader_name}(name)
  local entry = {table}[name]
  if entry == nil then
    error('Module "' .. tostring(name) .. '" not found in bundle')
  end
  if type(entry) == 'function' then
    local result = entry()
    {table}[name] = {{ value = result }}
    return result
  end
  return entry.value
end
'''

BRIDGE_TEMPLATE = '''\
function {bridge_name}(module, callback)
  setthreadidentity({bridge_identity})
  local ok, imported = pcall(require, module)
  setthreadidentity({restore_identity})
  if not ok then
    error(imported, 0)
  end
  if imported == nil then
    error('Failed to require game module "' .. tostring(module) .. '"')
  end
  if type(callback) == 'function' then
    callback(imported)
  end
  return imported
end
'''


class BundleEmitter:
    def __init__(self, tool_name='LuaBundler', module_version='', author='', description='', project_website=None,
                 additional_headers: Optional[Mapping[str, str]] = None,
                 loader_name='import', bridge_name='game_require', bridge_identity=2, restore_identity=7):
        self.tool_name = tool_name
        self.module_version = module_version
        self.author = author
        self.description = description
        self.project_website = project_website
        self.additional_headers = additional_headers
        self.loader_name = loader_name
        self.bridge_name = bridge_name
        self.bridge_identity = bridge_identity
        self.restore_identity = restore_identity

    def emit(self, modules, entry_code, generation_time: Optional[datetime.datetime] = None) -> str:
        """Serializes the module table and the entry module into the bundle text.

        `modules` maps canonical paths to `Module` records and is emitted in its iteration order. The entry code
        always comes last.
        """
        output = [self.generate_header(generation_time), '']

        for name, module in modules.items():
            output.extend([f"{BUNDLE_TABLE}[{lua_string(name)}] = function()", module.code, 'end', ''])

        output.append(self.generate_loader())
        output.append(self.generate_bridge())
        output.extend(['-- Entry point', entry_code])
        return '\n'.join(output)

    def generate_header(self, generation_time=None):
        generation_time = generation_time or datetime.datetime.now()
        header_parts = [
            '--',
            f"-- {self.tool_name} v{VERSION}",
            f"-- Bundled on {generation_time.strftime('%Y-%m-%d')} at {generation_time.strftime('%H:%M:%S')}",
        ]
        if self.module_version:
            header_parts.append(f"-- Version: {self.module_version}")
        if self.author:
            header_parts.append(f"-- Author: {self.author}")
        if self.description:
            header_parts.append(f"-- Description: {self.description}")
        if self.project_website:
            header_parts.append(f"-- Website: {self.project_website}")

        if self.additional_headers:
            header_parts.append('--')
            header_parts.append('-- Additional Metadata:')
            for key, value in self.additional_headers.items():
                header_parts.append(f"--   {key}: {value}")

        header_parts.extend(['--', '--!nolint', f"local {BUNDLE_TABLE} = {{}}"])
        return '\n'.join(header_parts)

    def generate_loader(self):
        return LOADER_TEMPLATE.format(loader_name=self.loader_name, table=BUNDLE_TABLE)

    def generate_bridge(self):
        return BRIDGE_TEMPLATE.format(bridge_name=self.bridge_name, bridge_identity=self.bridge_identity,
                                      restore_identity=self.restore_identity)
