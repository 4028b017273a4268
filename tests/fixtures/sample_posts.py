"""Sample blog post HTML for testing.

These fixtures represent post bodies as exported from the CMS rich-text
field: headings, paragraphs, lists, and the embeds/widgets that must
survive a rewrite untouched.
"""

# Plain post: every block is long enough to act as a match anchor
SAMPLE_POST_SIMPLE = """
<h1>Best Project Management Tools for Small Teams</h1>
<p>Choosing a project management tool is harder than it looks.</p>
<h2>What to look for in a good tool</h2>
<p>Look for clear pricing, a fast interface and honest support.</p>
<ul>
<li>Clear pricing with no hidden fees</li>
<li>Fast interface that works offline</li>
</ul>
<h2>Our final recommendation</h2>
<p>Start with the free plan and upgrade when the team grows.</p>
"""

# Same post after a rewrite: one paragraph genuinely changed, one only
# re-punctuated and re-cased
SAMPLE_POST_REVISED = """
<h1>Best Project Management Tools for Small Teams</h1>
<p>CHOOSING a project management tool is harder than it looks!</p>
<h2>What to look for in a good tool</h2>
<p>Enterprise buyers should negotiate annual contracts before committing budgets.</p>
<ul>
<li>Clear pricing with no hidden fees</li>
<li>Fast interface that works offline</li>
</ul>
<h2>Our final recommendation</h2>
<p>Start with the free plan and upgrade when the team grows.</p>
"""

# Post with media and widgets that the detector must never touch
SAMPLE_POST_WITH_EMBEDS = """
<h2>Pricing comparison across plans</h2>
<table><tr><th>Plan</th><th>Price</th></tr><tr><td>Starter</td><td>$10</td></tr></table>
<p>Every plan includes unlimited projects and guest access.</p>
<iframe src="https://www.youtube.com/embed/abc123" width="560"></iframe>
<div class="info-widget hidden"><p>Widget heading text goes here</p></div>
<p>Prices were last checked at the start of the quarter.</p>
"""

SAMPLE_POST_WITH_EMBEDS_REVISED = """
<h2>Pricing comparison across plans</h2>
<table><tr><th>Plan</th><th>Price</th></tr><tr><td>Starter</td><td>$12</td></tr></table>
<p>Every plan includes unlimited projects and guest access.</p>
<iframe src="https://www.youtube.com/embed/xyz789" width="560"></iframe>
<div class="info-widget hidden"><p>Rewritten widget copy that differs entirely</p></div>
<p>Prices were last checked at the start of the quarter.</p>
"""

# List markup as it typically comes back from a rewrite
MALFORMED_LISTS = """
<h2>Key features of the platform</h2>
<p><li>Kanban boards</li><li>Time tracking</li></p>
<ul>
<li>Reporting
<ul>
<li>Weekly summaries</li>
<li>Custom dashboards</li>
</ul>
</li>
<li><span>Integrations</span></li>
</ul>
<div><ol><li>Sign up</li><li>Invite the team</li></ol></div>
<div><li>Orphan one</li><li>Orphan two</li><p>Closing words.</p></div>
"""

# Four levels of nesting below the top-level list
DEEPLY_NESTED_LIST = (
    "<ul><li>A<ul><li>B<ul><li>C<ul><li>D<ul><li>E</li></ul>"
    "</li></ul></li></ul></li></ul></li></ul>"
)
