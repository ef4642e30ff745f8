# リポジトリの割り当て可能ユーザー一覧
ASSIGNEES = "repos/{owner}/{repo}/assignees"

# 特定ユーザーが割り当て可能か確認（204 = 可能）
ASSIGNEE = "repos/{owner}/{repo}/assignees/{assignee}"

# Issueの担当者追加（POST）・削除（DELETE）
ISSUE_ASSIGNEES = "repos/{owner}/{repo}/issues/{issue}/assignees"
