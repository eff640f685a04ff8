"""Service layer: stateless rule resolvers plus the turn coordinator."""
