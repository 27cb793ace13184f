"""
Crawl a deployed site's sitemaps and report every URL that redirects, fails,
or declares a different canonical.
"""
import argparse
import sys

from nrlsite.audit import CanonicalAuditor
from nrlsite.exceptions import AuditError
from nrlsite.logger import log


def main(argv=None):
    parser = argparse.ArgumentParser(description='Audit canonical URLs listed in sitemaps')
    parser.add_argument('base_url', help='Site root, e.g. https://nrlcmd.com')
    parser.add_argument('--limit', type=int, default=None, help='Check at most N URLs')
    parser.add_argument('--timeout', type=int, default=10, help='Request timeout in seconds')
    args = parser.parse_args(argv)

    auditor = CanonicalAuditor(timeout=args.timeout)
    try:
        result = auditor.audit(args.base_url, limit=args.limit)
    except AuditError as e:
        log.error(str(e))
        return 2

    for issue in result['issues']:
        print(f"[{issue['type'].upper()}] {issue['issue']}: {issue['url']} ({issue['details']})")

    print(f"\nChecked {result['checked']} URLs, {len(result['issues'])} issue(s)")
    return 1 if result['issues'] else 0


if __name__ == '__main__':
    sys.exit(main())
