# ungd_nlp/messages/topic_messages.py

TOO_FEW_TOPICS = "num_topics must be at least 2; got {k}."
TOO_MANY_TOPICS = (
    "num_topics={k} exceeds what {ndoc} documents x {nfeat} terms can support."
)
UNSUPPORTED_BACKEND = "Unsupported topic model backend: {backend}"
UNSUPPORTED_INIT = "Backend '{backend}' does not support init='{init}'."
BAD_ITERATION_BUDGET = "max_iter must be a positive integer; got {max_iter}."
NOT_CONVERGED = "{backend} did not converge within {max_iter} iterations."
NO_DOCUMENTS = "No non-empty documents left to fit a topic model on."
UNKNOWN_TOPIC = "Topic {topic} is out of range for a {k}-topic model."
