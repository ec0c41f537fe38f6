"""GraphQL documents used against the storage query node.

Both queries order by ``createdAt`` with ``id`` as tiebreaker: offset
pagination is only stable when the ordering is total.
"""

STORAGE_BUCKET_BAGS = """
query GetStorageBucketBags($storageBucket: ID!, $limit: Int!, $offset: Int!) {
    storageBags(
        where: { storageBuckets_some: { id_eq: $storageBucket } }
        orderBy: [createdAt_ASC, id_ASC]
        limit: $limit
        offset: $offset
    ) {
        id
    }
}
"""

STORAGE_BAGS_OBJECTS = """
query GetStorageBagsObjects($storageBags: [ID!]!, $limit: Int!, $offset: Int!) {
    storageBags(
        where: { id_in: $storageBags }
        orderBy: [createdAt_ASC, id_ASC]
        limit: $limit
        offset: $offset
    ) {
        id
        objects {
            id
            isAccepted
        }
    }
}
"""
