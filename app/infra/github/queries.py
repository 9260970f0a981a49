"""GitHub GraphQL 쿼리 문서"""

USER_PROFILE_QUERY = """
query($login: String!) {
  user(login: $login) {
    login
    name
    avatarUrl
    bio
    location
    company
    email
    websiteUrl
    url
    createdAt
    repositories(ownerAffiliations: OWNER) {
      totalCount
    }
    publicRepositories: repositories(privacy: PUBLIC, ownerAffiliations: OWNER) {
      totalCount
    }
    privateRepositories: repositories(privacy: PRIVATE, ownerAffiliations: OWNER) {
      totalCount
    }
    pullRequests(states: MERGED) {
      totalCount
    }
    contributionsCollection {
      totalCommitContributions
      restrictedContributionsCount
    }
  }
}
"""

# search(type: ISSUE)는 이슈와 PR을 함께 반환, PR이 아닌 노드는 빈 객체로 옴
PR_SEARCH_QUERY = """
query($query: String!, $cursor: String) {
  search(query: $query, type: ISSUE, first: 100, after: $cursor) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      ... on PullRequest {
        additions
        deletions
      }
    }
  }
}
"""
