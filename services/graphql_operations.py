"""
GraphQL documents for the BlogPost model.

These mirror the operations generated for the backend schema and must stay
in sync with it.
"""

BLOG_POST_FIELDS = """
      id
      title
      content
      owner
      createdAt
      updatedAt
"""

LIST_BLOG_POSTS = """
  query ListBlogPosts($filter: ModelBlogPostFilterInput, $limit: Int, $nextToken: String) {
    listBlogPosts(filter: $filter, limit: $limit, nextToken: $nextToken) {
      items {%s}
      nextToken
    }
  }
""" % BLOG_POST_FIELDS

CREATE_BLOG_POST = """
  mutation CreateBlogPost($input: CreateBlogPostInput!, $condition: ModelBlogPostConditionInput) {
    createBlogPost(input: $input, condition: $condition) {%s}
  }
""" % BLOG_POST_FIELDS

UPDATE_BLOG_POST = """
  mutation UpdateBlogPost($input: UpdateBlogPostInput!, $condition: ModelBlogPostConditionInput) {
    updateBlogPost(input: $input, condition: $condition) {%s}
  }
""" % BLOG_POST_FIELDS

DELETE_BLOG_POST = """
  mutation DeleteBlogPost($input: DeleteBlogPostInput!, $condition: ModelBlogPostConditionInput) {
    deleteBlogPost(input: $input, condition: $condition) {%s}
  }
""" % BLOG_POST_FIELDS
