"""Built-in Jinja2 templates used to render documentation.

Each template can be replaced by name with --template or --template-file.
Templates see the active formatter as ``fmt`` along with the ``parse_doc``
and ``code_href`` helpers.
"""

FILE_TEMPLATE = """\
{% if file.header %}
{{ file.header }}

{% endif %}
{% for package in file.packages %}
{% include "package" %}

{% endfor %}
{% if file.footer %}
{{ file.footer }}

{% endif %}
Generated by {{ fmt.bold("pymarkdoc") }}
"""

PACKAGE_TEMPLATE = """\
{{ fmt.header(fmt.escape(package.name), 1) }}

{{ fmt.code_block("import " ~ package.name) }}

{% with doc = package.doc, doc_level = 2 %}{% include "doc" %}{% endwith %}

{% include "index" %}

{% if package.values %}
{{ fmt.header("Values", 2) }}

{% for value in package.values %}
{% include "value" %}

{% endfor %}
{% endif %}
{% for func in package.funcs %}
{% with level = 2 %}{% include "func" %}{% endwith %}

{% endfor %}
{% for type in package.types %}
{% include "type" %}

{% endfor %}
"""

INDEX_TEMPLATE = """\
{{ fmt.header("Index", 2) }}

{% if package.values %}
{{ fmt.list_entry(0, fmt.local_link("Values", "Values")) }}
{% endif %}
{% for func in package.funcs %}
{{ fmt.list_entry(0, fmt.local_link("def " ~ func.title, "def " ~ func.title)) }}
{% endfor %}
{% for type in package.types %}
{{ fmt.list_entry(0, fmt.local_link("class " ~ type.name, "class " ~ type.name)) }}
{% for func in type.methods %}
{{ fmt.list_entry(1, fmt.local_link("def " ~ func.title, "def " ~ func.title)) }}
{% endfor %}
{% endfor %}
"""

VALUE_TEMPLATE = """\
{{ fmt.code_block(value.signature) }}

{% with doc = value.doc, doc_level = 3 %}{% include "doc" %}{% endwith %}
"""

FUNC_TEMPLATE = """\
{{ fmt.header("def " ~ fmt.link(fmt.escape(func.title), code_href(func.location, package.repository)), level) }}

{{ fmt.code_block(func.signature) }}

{% with doc = func.doc, doc_level = level + 1 %}{% include "doc" %}{% endwith %}
"""

TYPE_TEMPLATE = """\
{{ fmt.header("class " ~ fmt.link(fmt.escape(type.name), code_href(type.location, package.repository)), 2) }}

{{ fmt.code_block(type.signature) }}

{% with doc = type.doc, doc_level = 3 %}{% include "doc" %}{% endwith %}

{% for value in type.attributes %}
{% include "value" %}

{% endfor %}
{% for func in type.methods %}
{% with level = 3 %}{% include "func" %}{% endwith %}

{% endfor %}
"""

DOC_TEMPLATE = """\
{% for block in parse_doc(doc) %}
{% if block.kind.value == "code" %}
{{ fmt.code_block(block.text) }}
{% elif block.kind.value == "header" %}
{{ fmt.header(fmt.escape(block.text), doc_level) }}
{% else %}
{{ block.text }}
{% endif %}

{% endfor %}
"""

TEMPLATES = {
    "file": FILE_TEMPLATE,
    "package": PACKAGE_TEMPLATE,
    "index": INDEX_TEMPLATE,
    "value": VALUE_TEMPLATE,
    "func": FUNC_TEMPLATE,
    "type": TYPE_TEMPLATE,
    "doc": DOC_TEMPLATE,
}
