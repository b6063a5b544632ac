"""Voter registry built on a Bloom filter, red-black trees and ordered lists."""