"""Default HTML comparison report template."""

REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Policy Comparison - {{ left_source }} vs {{ right_source }}</title>
    <style>
        :root {
            --primary: #2563eb; --success: #16a34a; --warning: #ca8a04; --danger: #dc2626;
            --gray-100: #f3f4f6; --gray-200: #e5e7eb; --gray-700: #374151; --gray-900: #111827;
        }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6; color: var(--gray-900); max-width: 1200px; margin: 0 auto; padding: 2rem; background: var(--gray-100); }
        .header { background: white; padding: 2rem; border-radius: 8px; margin-bottom: 2rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        h1 { color: var(--primary); margin: 0 0 0.5rem 0; }
        .meta { color: var(--gray-700); font-size: 0.9rem; }
        .stats { display: flex; gap: 2rem; margin-top: 1rem; }
        .stat { background: var(--gray-100); padding: 0.5rem 1rem; border-radius: 4px; }
        .stat-value { font-size: 1.5rem; font-weight: bold; color: var(--primary); }
        .stat-label { font-size: 0.75rem; color: var(--gray-700); }
        table { width: 100%; border-collapse: collapse; background: white; border-radius: 8px; overflow: hidden;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        th { background: var(--gray-200); padding: 0.75rem; text-align: left; font-size: 0.85rem; }
        td { padding: 0.75rem; border-bottom: 1px solid var(--gray-200); vertical-align: top; }
        .null { color: var(--gray-700); font-style: italic; }
        .badge { display: inline-block; padding: 0.25rem 0.75rem; border-radius: 9999px; font-size: 0.75rem; font-weight: 600; text-transform: uppercase; }
        .badge-same { background: #dcfce7; color: #166534; }
        .badge-different { background: #fee2e2; color: #991b1b; }
        .badge-missing { background: #fef3c7; color: #92400e; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Policy Comparison</h1>
        <p class="meta">{{ left_source }} vs {{ right_source }} &middot; Generated: {{ generated_at }}</p>
        <div class="stats">
            <div class="stat"><div class="stat-value">{{ total }}</div><div class="stat-label">Fields</div></div>
            <div class="stat"><div class="stat-value">{{ same }}</div><div class="stat-label">Same</div></div>
            <div class="stat"><div class="stat-value">{{ different }}</div><div class="stat-label">Different</div></div>
            <div class="stat"><div class="stat-value">{{ missing }}</div><div class="stat-label">Missing</div></div>
        </div>
    </div>
    <table>
        <thead>
            <tr><th>Field</th><th>{{ left_source or "File 1" }}</th><th>{{ right_source or "File 2" }}</th><th>Status</th></tr>
        </thead>
        <tbody>
        {% for record in records %}
            <tr>
                <td>{{ record.field }}</td>
                <td>{% if record.file1Value is none %}<span class="null">null</span>{% else %}{{ record.file1Value }}{% endif %}</td>
                <td>{% if record.file2Value is none %}<span class="null">null</span>{% else %}{{ record.file2Value }}{% endif %}</td>
                <td><span class="badge badge-{{ record.status }}">{{ record.status }}</span></td>
            </tr>
        {% endfor %}
        </tbody>
    </table>
</body>
</html>
"""
