"""Common literal values used across notes_preview.

These constants keep asset paths, HTML snippets and marker text centralised so
the converter modules, templates and tests share the same values without
drifting. Intended for internal use within the notes_preview package.

Examples
--------
>>> from notes_preview import _constants
>>> _constants.CSS_LINK_TEMPLATE.format(base="assets/", path="markdown.css")
"<link rel='stylesheet' href='assets/markdown.css'/>"
>>> _constants.AUTO_TOC_MARKER in _constants.AUTO_TOC_BLOCK
True
"""

CSS_LINK_TEMPLATE = "<link rel='stylesheet' href='{base}{path}'/>"
JS_SCRIPT_TEMPLATE = "<script src='{base}{path}'></script>"
DEFAULT_ASSET_BASE_URL = "file:///android_asset/"

MARKDOWN_STYLESHEET = "markdown.css"
KATEX_STYLESHEETS = ("katex/katex.min.css",)
KATEX_SCRIPTS = (
    "katex/katex.min.js",
    "katex/katex-render.js",
    "katex/mhchem.min.js",
)
MERMAID_SCRIPTS = ("mermaid/mermaid.min.js",)
MERMAID_INIT_TEMPLATE = (
    "<script>mermaid.initialize({{theme:'{theme}',logLevel:5,"
    "securityLevel:'loose'}});</script>"
)
ADMONITION_STYLESHEETS = ("flexmark/admonition.css",)
ADMONITION_SCRIPTS = ("flexmark/admonition.js",)
PRISM_THEME_TEMPLATE = "prism/themes/prism{theme}.min.css"
PRISM_DARK_THEME_SUFFIX = "-tomorrow"
PRISM_STYLESHEETS = (
    "prism/prism-markor.css",
    "prism/plugins/toolbar/prism-toolbar.css",
)
PRISM_SCRIPTS = (
    "prism/prism.js",
    "prism/components.js",
    "prism/prism-markor.js",
    "prism/plugins/autoloader/prism-autoloader.min.js",
    "prism/plugins/toolbar/prism-toolbar.min.js",
    "prism/plugins/copy-to-clipboard/prism-copy-to-clipboard.min.js",
)
PRISM_LINE_NUMBER_STYLESHEETS = (
    "prism/plugins/line-numbers/prism-line-numbers-markor.css",
)
PRISM_LINE_NUMBER_SCRIPTS = (
    "prism/plugins/line-numbers/prism-line-numbers.min.js",
    "prism/plugins/line-numbers/prism-line-numbers-markor.js",
)

ONLOAD_PRISM = "usePrismCodeBlock();"
ONLOAD_WRAP_CODE = "wrapCodeBlockWords();"
ONLOAD_LINE_NUMBERS = "enableLineNumbers(); adjustLineNumbers();"

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_SCOPES = ("post",)
FRONT_MATTER_WILDCARD = "*"
HTML_FRONT_MATTER_CONTAINER_START = "<div class='front-matter-container'>"
HTML_FRONT_MATTER_CONTAINER_END = "</div>"
HTML_FRONT_MATTER_ITEM_START = (
    "<div class='front-matter-item front-matter-container-{name}'>"
)
HTML_FRONT_MATTER_ITEM_END = "</div>"
HTML_TOKEN_ITEM = "<span class='{scope}-item-{name}'>{value}</span>"
HTML_TOKEN_DELIMITER = "<span class='{scope}-delimiter-{name} delimiter'></span>"

SITE_BASEURL_TOKEN = "{{ site.baseurl }}"
SITE_BASEURL_REPLACEMENT = ".."
SITE_DATE_TOKEN = "{{ site.time | date: '%x' }}"
ATTACHMENT_LINK_PREFIX = "](@attachment/"
ATTACHMENT_LINK_REPLACEMENT = "](../attachements/"

EXPLICIT_TOC_MARKER = "[TOC]"
AUTO_TOC_MARKER = "[TOC]: # ''"
AUTO_TOC_BLOCK = AUTO_TOC_MARKER + "\n  \n"
BLOG_FOLDER_NAMES = frozenset({"_posts", "blog", "post"})
TOC_DIV_CLASS = "markor-table-of-contents toc"
TOC_LIST_CLASS = "markor-table-of-contents-list"
DEFAULT_TOC_TITLE = "Table of Contents"
HEADER_ANCHOR_CLASS = "header_no_underline"

HTML_SLIDE_START = (
    "<!-- Presentation slide {number} --> "
    "<div class='slide_p{number} slide'><div class='slide_body'>"
)
HTML_TITLE_SLIDE_START = (
    "<!-- Presentation slide {number} --> "
    "<div class='slide_p{number} slide_type_title slide'>"
    "<div class='slide_body slide_title'>"
)
HTML_SLIDE_END = "</div></div>"
