from __future__ import annotations

import json
from string import Template

from elphadeal.core.paths import APP_NAME, COMPONENT_FILENAME

COMPONENT_SOURCE = f"""\
function createApp(document) {{
  const container = document.createElement('div');
  container.setAttribute('id', 'app');

  const heading = document.createElement('h1');
  heading.textContent = 'Hello from {APP_NAME}';
  container.appendChild(heading);

  return container;
}}

module.exports = {{ createApp }};
"""

DEFAULT_ENTRY_SOURCE = f"""\
const {{ createApp }} = require('./{COMPONENT_FILENAME}');

const root = createApp(document);
document.body.appendChild(root);

setTimeout(() => {{
  console.log('App mounted:', root.getAttribute('id'));
}}, 0);
"""

_TEMPLATED_ENTRY = Template(
    """\
const pkg = require($module);

const root = document.createElement('div');
root.setAttribute('id', 'app');
root.textContent = 'Loaded ' + $module + (pkg && pkg.VERSION ? ' v' + pkg.VERSION : '');
document.body.appendChild(root);

console.log(root.textContent);
"""
)


def render_templated_entry(package_name: str) -> str:
    """Entry file that requires ``package_name`` and reports it in the document."""
    return _TEMPLATED_ENTRY.substitute(module=json.dumps(package_name))
