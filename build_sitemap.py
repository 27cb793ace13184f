"""
Write the sitemap index and every sitemap shard to disk, for hosting the
sitemaps as static files.
"""
import argparse
import sys
from pathlib import Path

from nrlsite.config import SiteConfig
from nrlsite.logger import log
from nrlsite.sitemap import SitemapBuilder, render_sitemap_index, render_urlset


def write_sitemaps(site_config, output_dir, host=None):
    """Write sitemap-index.xml, sitemap.xml and sitemaps/sitemap-<n>.xml; return the paths."""
    host = host or site_config.default_host
    output_dir = Path(output_dir)
    (output_dir / 'sitemaps').mkdir(parents=True, exist_ok=True)

    builder = SitemapBuilder(site_config, host=host)
    pages = builder.page_count()
    written = []

    index_path = output_dir / 'sitemap-index.xml'
    index_path.write_text(render_sitemap_index(host, pages), encoding='utf-8')
    written.append(index_path)

    matrix_path = output_dir / 'sitemap.xml'
    matrix_path.write_text(render_urlset(builder.matrix_entries()), encoding='utf-8')
    written.append(matrix_path)

    for page in range(1, pages + 1):
        page_path = output_dir / 'sitemaps' / f"sitemap-{page}.xml"
        page_path.write_text(render_urlset(builder.page(page)), encoding='utf-8')
        written.append(page_path)

    log.info(f"Wrote {len(builder.entries())} URLs in {pages} shard(s) to {output_dir}")
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description='Write static sitemap files')
    parser.add_argument('--output', '-o', default='public', help='Output directory (default: public)')
    parser.add_argument('--host', help='Host for absolute URLs (default: SITE_DEFAULT_HOST)')
    args = parser.parse_args(argv)

    for path in write_sitemaps(SiteConfig.from_env(), args.output, args.host):
        print(f"Wrote {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
