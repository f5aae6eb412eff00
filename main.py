#This file is for development purposes only

import logging
import sys

from jira_ticket_impl import IntegrationParams, get_issue_fields, get_issue_types


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    params = IntegrationParams.from_env(interactive=True)

    print("\nFetching issue types...")
    try:
        issue_types = get_issue_types(params, {})
        for name in issue_types:
            print(f"- {name}")
    except Exception as e:
        print(f"Error connecting to Jira: {e}")
        return

    issue_type = sys.argv[1] if len(sys.argv) > 1 else (issue_types[0] if issue_types else "Bug")
    print(f"\nFields for '{issue_type}':")
    try:
        for field in get_issue_fields(params, {"issueType": issue_type}):
            marker = "*" if field["required"] else " "
            print(f"{marker} {field['id']} ({field['fieldType']}) {field['fieldName']}: {len(field['definedValues'])} options")
    except Exception as e:
        print(f"Error connecting to Jira: {e}")

if __name__ == "__main__":
    main()
